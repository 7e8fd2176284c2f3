"""Search space of every legal bet in a round."""

from __future__ import annotations

import dataclasses
import itertools
import logging
from typing import Sequence

import polars as pl

from .bits import ARENA_COUNT, Selection, mask_to_selection, selection_mask

logger = logging.getLogger(__name__)

MAX_PAYOUT = 1_000_000
SEARCH_SPACE_SIZE = 5**ARENA_COUNT - 1

ProbabilityMatrix = Sequence[Sequence[float]]
OddsMatrix = Sequence[Sequence[int]]

_SORT_COLUMNS = ("mask", "probability", "odds", "expected_return", "max_bet")


@dataclasses.dataclass(frozen=True)
class SearchSpaceTable:
    """Index-aligned columns describing all 3,124 non-empty selections.

    ``probabilities`` and ``odds`` hold the 5x5 round matrices the table was
    built from (column 0 of each row is a placeholder).
    """

    masks: tuple[int, ...]
    probabilities_by_bet: tuple[float, ...]
    odds_by_bet: tuple[int, ...]
    expected_returns: tuple[float, ...]
    max_bets: tuple[int, ...]
    probabilities: tuple[tuple[float, ...], ...]
    odds: tuple[tuple[int, ...], ...]
    _index_by_mask: dict[int, int] = dataclasses.field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_index_by_mask",
            {mask: index for index, mask in enumerate(self.masks)},
        )

    def __len__(self) -> int:
        return len(self.masks)

    def index_of(self, mask: int) -> int:
        """Return the table index for ``mask``; raises ``KeyError`` if absent."""

        return self._index_by_mask[mask]

    def selection(self, index: int) -> Selection:
        return mask_to_selection(self.masks[index])

    def argsort(self, column: str = "expected_return", *, descending: bool = True) -> list[int]:
        """Return table indices ordered by one column.

        Ties keep table order, so the result is deterministic.
        """

        if column not in _SORT_COLUMNS:
            raise ValueError(f"Unknown column: {column}")
        values = self._column(column)
        return sorted(range(len(values)), key=values.__getitem__, reverse=descending)

    def _column(self, column: str) -> Sequence[float]:
        return {
            "mask": self.masks,
            "probability": self.probabilities_by_bet,
            "odds": self.odds_by_bet,
            "expected_return": self.expected_returns,
            "max_bet": self.max_bets,
        }[column]

    def to_frame(self) -> pl.DataFrame:
        return pl.DataFrame(
            {
                "index": list(range(len(self.masks))),
                "mask": list(self.masks),
                "selection": [list(mask_to_selection(mask)) for mask in self.masks],
                "probability": list(self.probabilities_by_bet),
                "odds": list(self.odds_by_bet),
                "expected_return": list(self.expected_returns),
                "max_bet": list(self.max_bets),
            },
            schema_overrides={
                "index": pl.Int64,
                "mask": pl.Int64,
                "selection": pl.List(pl.Int64),
                "odds": pl.Int64,
                "max_bet": pl.Int64,
            },
        )


def max_bet_for_odds(odds: int) -> int:
    """Smallest stake that reaches :data:`MAX_PAYOUT` at ``odds``."""

    return -(-MAX_PAYOUT // odds)


def build_search_space(
    probabilities: ProbabilityMatrix,
    odds: OddsMatrix,
) -> SearchSpaceTable:
    """Enumerate every non-empty selection and score it.

    Unpicked arenas contribute a factor of one to both the joint probability
    and the joint odds.
    """

    masks: list[int] = []
    bet_probabilities: list[float] = []
    bet_odds: list[int] = []
    expected_returns: list[float] = []
    max_bets: list[int] = []

    for selection in itertools.product(range(5), repeat=ARENA_COUNT):
        if not any(selection):
            continue
        probability = 1.0
        total_odds = 1
        for arena, position in enumerate(selection):
            if position:
                probability *= probabilities[arena][position]
                total_odds *= int(odds[arena][position])
        masks.append(selection_mask(selection))
        bet_probabilities.append(probability)
        bet_odds.append(total_odds)
        expected_returns.append(probability * total_odds)
        max_bets.append(max_bet_for_odds(total_odds))

    logger.debug(
        "Built search space with %d bets (best expected return %.3f)",
        len(masks),
        max(expected_returns),
    )
    return SearchSpaceTable(
        masks=tuple(masks),
        probabilities_by_bet=tuple(bet_probabilities),
        odds_by_bet=tuple(bet_odds),
        expected_returns=tuple(expected_returns),
        max_bets=tuple(max_bets),
        probabilities=tuple(tuple(float(value) for value in row) for row in probabilities),
        odds=tuple(tuple(int(value) for value in row) for row in odds),
    )


__all__ = [
    "MAX_PAYOUT",
    "SEARCH_SPACE_SIZE",
    "SearchSpaceTable",
    "build_search_space",
    "max_bet_for_odds",
]
