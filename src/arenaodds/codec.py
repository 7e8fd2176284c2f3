"""Legacy text encodings for bet selections and stake amounts.

Both formats are shared in links and stored by users, so the byte-level layout
is frozen:

* the *bets hash* packs selection values pairwise into letters ``a``-``y``
  (``first * 5 + second``);
* the *amounts hash* writes each stake as three base-52 digits
  (``a``-``z`` then ``A``-``Z``), offset by :data:`BET_AMOUNT_MAX`.
"""

from __future__ import annotations

import re
import string
from typing import Iterable, Sequence

from .bits import ARENA_COUNT, Selection, selection_mask

BET_AMOUNT_MIN = 50
BET_AMOUNT_MAX = 70304

AMOUNT_ALPHABET = string.ascii_lowercase + string.ascii_uppercase
AMOUNT_WIDTH = 3

_BETS_HASH_PATTERN = re.compile(r"[a-y]*")
_AMOUNTS_HASH_PATTERN = re.compile(r"[a-zA-Z]*")
_AMOUNT_DIGITS = {letter: index for index, letter in enumerate(AMOUNT_ALPHABET)}


class InvalidHashError(ValueError):
    """Raised when a bets or amounts hash cannot be decoded."""


def _check_bets_hash(bets_hash: str) -> None:
    if not _BETS_HASH_PATTERN.fullmatch(bets_hash):
        raise InvalidHashError(f"Invalid bets hash: {bets_hash!r}")


def bets_hash_value(selections: Iterable[Sequence[int]]) -> str:
    """Encode selections into a bets hash."""

    flattened = [value for selection in selections for value in selection]
    if len(flattened) % 2:
        flattened.append(0)
    return "".join(
        chr(ord("a") + first * 5 + second)
        for first, second in zip(flattened[::2], flattened[1::2])
    )


def bets_hash_to_selections(bets_hash: str) -> list[Selection]:
    """Decode a bets hash into selections.

    All-zero chunks are alignment padding and are dropped, so ``"faa"``
    decodes to a single bet.
    """

    _check_bets_hash(bets_hash)
    values: list[int] = []
    for letter in bets_hash:
        values.extend(divmod(ord(letter) - ord("a"), 5))
    remainder = len(values) % ARENA_COUNT
    if remainder:
        values.extend([0] * (ARENA_COUNT - remainder))
    selections: list[Selection] = []
    for start in range(0, len(values), ARENA_COUNT):
        chunk = tuple(values[start : start + ARENA_COUNT])
        if any(chunk):
            selections.append(chunk)  # type: ignore[arg-type]
    return selections


def bets_hash_to_bet_masks(bets_hash: str) -> list[int]:
    return [selection_mask(selection) for selection in bets_hash_to_selections(bets_hash)]


def bets_hash_to_bet_count(bets_hash: str) -> int:
    return len(bets_hash_to_selections(bets_hash))


def _encode_amount(amount: int | None) -> str:
    state = (amount or 0) % BET_AMOUNT_MAX + BET_AMOUNT_MAX
    letters = []
    for _ in range(AMOUNT_WIDTH):
        state, digit = divmod(state, len(AMOUNT_ALPHABET))
        letters.append(AMOUNT_ALPHABET[digit])
    return "".join(reversed(letters))


def bet_amounts_to_amounts_hash(amounts: Iterable[int | None]) -> str:
    """Encode stakes into an amounts hash; ``None`` encodes as zero."""

    return "".join(_encode_amount(amount) for amount in amounts)


def amounts_hash_to_bet_amounts(amounts_hash: str) -> list[int | None]:
    """Decode an amounts hash.

    Values below :data:`BET_AMOUNT_MIN` come back as ``None``.
    """

    if not _AMOUNTS_HASH_PATTERN.fullmatch(amounts_hash):
        raise InvalidHashError(f"Invalid amounts hash: {amounts_hash!r}")
    if len(amounts_hash) % AMOUNT_WIDTH:
        raise InvalidHashError(
            f"Amounts hash length must be a multiple of {AMOUNT_WIDTH}, got {len(amounts_hash)}"
        )
    amounts: list[int | None] = []
    for start in range(0, len(amounts_hash), AMOUNT_WIDTH):
        value = 0
        for letter in amounts_hash[start : start + AMOUNT_WIDTH]:
            value = value * len(AMOUNT_ALPHABET) + _AMOUNT_DIGITS[letter]
        value = max(0, value - BET_AMOUNT_MAX)
        amounts.append(value if value >= BET_AMOUNT_MIN else None)
    return amounts


__all__ = [
    "AMOUNT_ALPHABET",
    "BET_AMOUNT_MAX",
    "BET_AMOUNT_MIN",
    "InvalidHashError",
    "amounts_hash_to_bet_amounts",
    "bet_amounts_to_amounts_hash",
    "bets_hash_to_bet_count",
    "bets_hash_to_bet_masks",
    "bets_hash_to_selections",
    "bets_hash_value",
]
