"""Bet sets: a chosen group of search-space entries plus their stakes."""

from __future__ import annotations

import functools
import logging
import operator
from typing import Iterable, Sequence, Union

import polars as pl

from .bits import ARENA_COUNT, Selection, mask_to_selection, selection_mask
from .chances import OddsSummary, build_chances, is_guaranteed_win
from .codec import (
    BET_AMOUNT_MAX,
    BET_AMOUNT_MIN,
    amounts_hash_to_bet_amounts,
    bet_amounts_to_amounts_hash,
    bets_hash_to_bet_masks,
    bets_hash_value,
)
from .table import SearchSpaceTable

logger = logging.getLogger(__name__)

BetAmountsInput = Union[str, Sequence[Union[int, None]], int, None]


def clamp_bet_amount(amount: int) -> int:
    return max(BET_AMOUNT_MIN, min(BET_AMOUNT_MAX, int(amount)))


def resolve_bet_amounts(
    amounts: BetAmountsInput,
    length: int,
) -> list[int | None] | None:
    """Normalise the accepted stake inputs into a list of optional stakes.

    ``amounts`` may be an amounts hash, a sequence of stakes (``None`` for
    undefined), a single stake applied to every bet, or ``None``.  Trailing
    undefined stakes are dropped and defined stakes are clamped to the legal
    range.  A single stake outside the legal range resolves to ``None``.
    """

    if amounts is None:
        return None
    if isinstance(amounts, int):
        if length == 0 or not BET_AMOUNT_MIN <= amounts <= BET_AMOUNT_MAX:
            return None
        return [amounts] * length
    if isinstance(amounts, str):
        values: list[int | None] = list(amounts_hash_to_bet_amounts(amounts))
    else:
        values = list(amounts)
    while values and values[-1] is None:
        values.pop()
    return [None if value is None else clamp_bet_amount(value) for value in values]


class BetSet:
    """A set of bets drawn from a :class:`SearchSpaceTable`.

    The chance table for the set is computed eagerly on construction.
    """

    def __init__(
        self,
        table: SearchSpaceTable,
        indices: Iterable[int],
        amounts: BetAmountsInput = None,
    ) -> None:
        self.table = table
        self.indices = list(indices)
        selections = [table.selection(index) for index in self.indices]
        odds = [table.odds_by_bet[index] for index in self.indices]
        self.summary = OddsSummary(
            build_chances(selections, odds, table.probabilities),
            len(self.indices),
        )
        self.bet_amounts: list[int | None] | None = None
        self.set_bet_amounts(amounts)

    @classmethod
    def from_masks(
        cls,
        table: SearchSpaceTable,
        masks: Iterable[int],
        amounts: BetAmountsInput = None,
    ) -> "BetSet":
        """Build a bet set from masks, keeping their order.

        Masks that are not part of the table are skipped.
        """

        indices: list[int] = []
        for mask in masks:
            try:
                indices.append(table.index_of(mask))
            except KeyError:
                logger.warning("Skipping mask 0x%05X not present in the search space", mask)
        return cls(table, indices, amounts)

    @classmethod
    def from_selections(
        cls,
        table: SearchSpaceTable,
        selections: Iterable[Sequence[int]],
        amounts: BetAmountsInput = None,
    ) -> "BetSet":
        return cls.from_masks(table, (selection_mask(s) for s in selections), amounts)

    @classmethod
    def from_hash(
        cls,
        table: SearchSpaceTable,
        bets_hash: str,
        amounts: BetAmountsInput = None,
    ) -> "BetSet":
        return cls.from_masks(table, bets_hash_to_bet_masks(bets_hash), amounts)

    def __len__(self) -> int:
        return len(self.indices)

    def set_bet_amounts(self, amounts: BetAmountsInput) -> None:
        """Replace the stakes for this set.

        Raises ``ValueError`` when a hash or sequence does not provide one
        stake per bet.
        """

        resolved = resolve_bet_amounts(amounts, len(self.indices))
        if resolved is None:
            self.bet_amounts = None
            return
        if not isinstance(amounts, int) and len(resolved) != len(self.indices):
            raise ValueError(
                "Bet amounts must be the same length as the bets, or None. "
                f"Provided: {len(resolved)} Expected: {len(self.indices)}"
            )
        self.bet_amounts = resolved

    def fill_bet_amounts(self, bet_amount: int) -> None:
        """Stake each bet with ``bet_amount``, capped so no payout exceeds the maximum."""

        self.bet_amounts = [
            max(BET_AMOUNT_MIN, min(bet_amount, self.table.max_bets[index]))
            for index in self.indices
        ]

    @property
    def masks(self) -> list[int]:
        return [self.table.masks[index] for index in self.indices]

    @property
    def selections(self) -> list[Selection]:
        return [mask_to_selection(mask) for mask in self.masks]

    @property
    def odds_values(self) -> list[int]:
        return [self.table.odds_by_bet[index] for index in self.indices]

    @property
    def bets_hash(self) -> str:
        return bets_hash_value(self.selections)

    @property
    def amounts_hash(self) -> str | None:
        if self.bet_amounts is None:
            return None
        return bet_amounts_to_amounts_hash(self.bet_amounts)

    def expected_return_list(self) -> list[float]:
        return [self.table.expected_returns[index] for index in self.indices]

    def expected_return(self) -> float:
        return sum(self.expected_return_list())

    def net_expected_list(self) -> list[float]:
        """Expected profit per bet given the current stakes; empty without stakes."""

        if self.bet_amounts is None:
            return []
        return [
            (amount or 0) * expected - (amount or 0)
            for expected, amount in zip(self.expected_return_list(), self.bet_amounts)
        ]

    def net_expected(self) -> float:
        return sum(self.net_expected_list())

    def is_bustproof(self) -> bool:
        return self.summary.bust is None

    def is_crazy(self) -> bool:
        """Every bet picks a competitor in all five arenas."""

        return all(mask.bit_count() == ARENA_COUNT for mask in self.masks)

    def count_tenbets(self) -> int:
        """Number of competitors shared by every bet in the set."""

        masks = self.masks
        if not masks:
            return 0
        return functools.reduce(operator.and_, masks).bit_count()

    def is_tenbet(self) -> bool:
        if len(self.indices) < 10:
            return False
        return self.count_tenbets() > 0

    def is_gambit(self) -> bool:
        """At least two bets, all subsets of one full five-competitor bet."""

        masks = self.masks
        if len(masks) < 2:
            return False
        highest = max(masks)
        if highest.bit_count() != ARENA_COUNT:
            return False
        return all(highest & mask == mask for mask in masks)

    def is_guaranteed_win(self) -> bool:
        return is_guaranteed_win(self.summary.bust, self.odds_values, self.bet_amounts)

    def to_frame(self) -> pl.DataFrame:
        """Return one row per bet with its odds, expected return and stake."""

        amounts = self.bet_amounts or [None] * len(self.indices)
        return pl.DataFrame(
            {
                "index": self.indices,
                "mask": self.masks,
                "selection": [list(selection) for selection in self.selections],
                "odds": self.odds_values,
                "expected_return": self.expected_return_list(),
                "max_bet": [self.table.max_bets[index] for index in self.indices],
                "amount": amounts,
            },
            schema={
                "index": pl.Int64,
                "mask": pl.Int64,
                "selection": pl.List(pl.Int64),
                "odds": pl.Int64,
                "expected_return": pl.Float64,
                "max_bet": pl.Int64,
                "amount": pl.Int64,
            },
        )

    def __repr__(self) -> str:
        return f"BetSet(hash={self.bets_hash!r}, amounts={self.amounts_hash!r})"


__all__ = [
    "BetAmountsInput",
    "BetSet",
    "clamp_bet_amount",
    "resolve_bet_amounts",
]
