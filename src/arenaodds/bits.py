"""Bitmask encoding of competitor selections.

A selection is five small integers, one per arena, where ``0`` means no pick
and ``1``-``4`` is the competitor position.  Masks pack a selection into 20
bits: arena 0 occupies the most significant nibble, and position ``p`` sets bit
``4 - p`` of its arena's nibble.

The same layout doubles as a constraint pattern: a fully set nibble accepts any
competitor in that arena, so ``WILDCARD`` describes every possible outcome.
"""

from __future__ import annotations

import random
from typing import Iterable, Sequence

ARENA_COUNT = 5
COMPETITORS_PER_ARENA = 4

# ARENA_MASKS[a] isolates arena a's nibble.
ARENA_MASKS = (0xF0000, 0xF000, 0xF00, 0xF0, 0xF)

# POSITION_MASKS[p - 1] selects position p in every arena at once.
POSITION_MASKS = (0x88888, 0x44444, 0x22222, 0x11111)

WILDCARD = 0xFFFFF

# Indexed by selection value: 0 accepts anyone, 1-4 accept that position only.
ACCEPT_ANY = (WILDCARD, *POSITION_MASKS)

Selection = tuple[int, int, int, int, int]

__all__ = [
    "ACCEPT_ANY",
    "ARENA_COUNT",
    "ARENA_MASKS",
    "COMPETITORS_PER_ARENA",
    "POSITION_MASKS",
    "Selection",
    "WILDCARD",
    "acceptance_pattern",
    "competitor_mask",
    "is_doable",
    "mask_to_selection",
    "random_full_mask",
    "selection_mask",
    "selections_to_masks",
]


def competitor_mask(position: int, arena: int) -> int:
    """Return the single-bit mask for ``position`` (1-4) in ``arena`` (0-4)."""

    if not 1 <= position <= COMPETITORS_PER_ARENA:
        return 0
    if not 0 <= arena < ARENA_COUNT:
        return 0
    return 0x80000 >> ((position - 1) + arena * 4)


def selection_mask(selection: Sequence[int]) -> int:
    """Combine a per-arena selection into one mask."""

    mask = 0
    for arena, position in enumerate(selection):
        mask |= competitor_mask(position, arena)
    return mask


def selections_to_masks(selections: Iterable[Sequence[int]]) -> list[int]:
    return [selection_mask(selection) for selection in selections]


def mask_to_selection(mask: int) -> Selection:
    """Decode a mask back into its per-arena competitor positions."""

    positions = [0] * ARENA_COUNT
    for arena, arena_mask in enumerate(ARENA_MASKS):
        masked = mask & arena_mask
        if masked:
            trailing_zeros = (masked & -masked).bit_length() - 1
            positions[arena] = 4 - trailing_zeros % 4
    return tuple(positions)  # type: ignore[return-value]


def is_doable(mask: int) -> bool:
    """Whether every arena still has at least one accepted competitor."""

    return all(mask & arena_mask for arena_mask in ARENA_MASKS)


def acceptance_pattern(selection: Sequence[int]) -> int:
    """Return the outcome pattern a bet on ``selection`` wins on.

    Unpicked arenas become wildcards; picked arenas accept only the chosen
    competitor.
    """

    pattern = 0
    for arena_mask, position in zip(ARENA_MASKS, selection):
        pattern |= ACCEPT_ANY[position] & arena_mask
    return pattern


def random_full_mask(rng: random.Random | None = None) -> int:
    """Return a mask with one random competitor picked in every arena."""

    generator = rng or random.Random()
    return selection_mask(
        [generator.randint(1, COMPETITORS_PER_ARENA) for _ in range(ARENA_COUNT)]
    )
