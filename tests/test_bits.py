"""Tests for the selection bitmask encoding."""

from __future__ import annotations

import itertools
import random

import pytest

from arenaodds.bits import (
    WILDCARD,
    acceptance_pattern,
    competitor_mask,
    is_doable,
    mask_to_selection,
    random_full_mask,
    selection_mask,
    selections_to_masks,
)


def test_single_competitor_round_trip() -> None:
    assert selection_mask([1, 0, 0, 0, 0]) == 0x80000
    assert mask_to_selection(0x80000) == (1, 0, 0, 0, 0)


@pytest.mark.parametrize(
    "position, arena, expected",
    [
        (1, 0, 0x80000),
        (4, 0, 0x10000),
        (3, 2, 0x200),
        (4, 4, 0x1),
        (0, 2, 0),
        (5, 1, 0),
        (1, 5, 0),
    ],
)
def test_competitor_mask(position: int, arena: int, expected: int) -> None:
    assert competitor_mask(position, arena) == expected


def test_selection_mask_spans_arenas() -> None:
    assert selection_mask([0, 1, 2, 3, 4]) == 0x08421
    assert mask_to_selection(1) == (0, 0, 0, 0, 4)
    assert mask_to_selection(0) == (0, 0, 0, 0, 0)


def test_every_selection_round_trips() -> None:
    for selection in itertools.product(range(5), repeat=5):
        assert mask_to_selection(selection_mask(selection)) == selection


def test_selections_to_masks_keeps_order() -> None:
    assert selections_to_masks([[0, 0, 0, 0, 1], [1, 0, 0, 0, 0]]) == [0x8, 0x80000]


def test_acceptance_pattern_wildcards_unpicked_arenas() -> None:
    assert acceptance_pattern([0, 0, 0, 0, 0]) == WILDCARD
    assert acceptance_pattern([1, 0, 0, 0, 0]) == 0x8FFFF
    assert acceptance_pattern([1, 2, 3, 4, 1]) == selection_mask([1, 2, 3, 4, 1])


def test_is_doable() -> None:
    assert is_doable(WILDCARD)
    assert is_doable(0x88888)
    assert not is_doable(0x8888F & 0xFFFF0)
    assert not is_doable(0x80000)


def test_random_full_mask_picks_every_arena() -> None:
    rng = random.Random(7)
    for _ in range(50):
        mask = random_full_mask(rng)
        assert mask.bit_count() == 5
        assert all(mask_to_selection(mask))
