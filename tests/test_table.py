"""Tests for the search space table builder."""

from __future__ import annotations

import itertools
import math

import polars as pl
import pytest

from arenaodds.bits import selection_mask
from arenaodds.table import (
    MAX_PAYOUT,
    SEARCH_SPACE_SIZE,
    SearchSpaceTable,
    build_search_space,
    max_bet_for_odds,
)


def test_table_is_complete(table: SearchSpaceTable) -> None:
    assert SEARCH_SPACE_SIZE == 3124
    assert len(table) == 3124
    expected = {
        selection_mask(selection)
        for selection in itertools.product(range(5), repeat=5)
        if any(selection)
    }
    assert len(set(table.masks)) == len(table.masks)
    assert set(table.masks) == expected
    assert 0 not in table.masks


def test_columns_are_index_aligned(table: SearchSpaceTable) -> None:
    lengths = {
        len(table.masks),
        len(table.probabilities_by_bet),
        len(table.odds_by_bet),
        len(table.expected_returns),
        len(table.max_bets),
    }
    assert lengths == {3124}


def test_single_arena_entry(table: SearchSpaceTable) -> None:
    index = table.index_of(selection_mask([1, 0, 0, 0, 0]))
    assert table.probabilities_by_bet[index] == pytest.approx(0.4)
    assert table.odds_by_bet[index] == 2
    assert table.expected_returns[index] == pytest.approx(0.8)
    assert table.max_bets[index] == 500_000


def test_full_entry_multiplies_every_arena(table: SearchSpaceTable) -> None:
    index = table.index_of(selection_mask([1, 1, 1, 1, 1]))
    assert table.selection(index) == (1, 1, 1, 1, 1)
    assert table.probabilities_by_bet[index] == pytest.approx(0.4 * 0.25 * 0.5 * 0.1 * 0.7)
    assert table.odds_by_bet[index] == 2 * 4 * 2 * 13 * 2
    assert table.max_bets[index] == 2404


def test_max_bet_uses_ceiling_division() -> None:
    assert max_bet_for_odds(2) == 500_000
    assert max_bet_for_odds(13) == 76_924
    assert max_bet_for_odds(416) == 2404
    for odds in range(2, 500):
        stake = max_bet_for_odds(odds)
        assert stake * odds >= MAX_PAYOUT
        assert (stake - 1) * odds < MAX_PAYOUT


def test_expected_return_is_probability_times_odds(table: SearchSpaceTable) -> None:
    for probability, odds, expected in zip(
        table.probabilities_by_bet, table.odds_by_bet, table.expected_returns
    ):
        assert math.isclose(probability * odds, expected)


def test_index_of_unknown_mask_raises(table: SearchSpaceTable) -> None:
    with pytest.raises(KeyError):
        table.index_of(0)


def test_argsort_orders_by_column(table: SearchSpaceTable) -> None:
    order = table.argsort("expected_return")
    assert table.expected_returns[order[0]] == max(table.expected_returns)
    ascending = table.argsort("odds", descending=False)
    assert table.odds_by_bet[ascending[0]] == min(table.odds_by_bet)
    with pytest.raises(ValueError):
        table.argsort("colour")


def test_to_frame(table: SearchSpaceTable) -> None:
    frame = table.to_frame()
    assert frame.height == 3124
    assert frame.columns == [
        "index",
        "mask",
        "selection",
        "probability",
        "odds",
        "expected_return",
        "max_bet",
    ]
    first = frame.row(0, named=True)
    assert first["selection"] == [0, 0, 0, 0, 1]
    assert first["mask"] == 0x8
    assert frame.schema["odds"] == pl.Int64


def test_unselected_arenas_use_identity_factor() -> None:
    probabilities = [[1.0, 0.25, 0.25, 0.25, 0.25] for _ in range(5)]
    odds = [[0, 4, 4, 4, 4] for _ in range(5)]
    built = build_search_space(probabilities, odds)
    index = built.index_of(selection_mask([0, 0, 3, 0, 0]))
    assert built.odds_by_bet[index] == 4
    assert built.probabilities_by_bet[index] == pytest.approx(0.25)
