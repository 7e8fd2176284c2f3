"""Win-amount probability distributions for a set of bets."""

from __future__ import annotations

import dataclasses
import logging
from collections import defaultdict
from typing import Mapping, Sequence

import polars as pl

from .bits import ARENA_MASKS, POSITION_MASKS
from .reducer import expand_outcomes

logger = logging.getLogger(__name__)

ProbabilityMatrix = Sequence[Sequence[float]]


@dataclasses.dataclass(frozen=True)
class Chance:
    """Probability of winning exactly ``value`` units.

    ``cumulative`` sums every payout up to and including ``value``; ``tail``
    sums every payout from ``value`` upwards.
    """

    value: int
    probability: float
    cumulative: float
    tail: float


def region_probability(region: int, probabilities: ProbabilityMatrix) -> float:
    """Probability that the round's winners fall inside ``region``.

    Arenas are treated as independent and each probability row is assumed to
    be normalised already.
    """

    total = 1.0
    for arena, arena_mask in enumerate(ARENA_MASKS):
        arena_total = 0.0
        for offset, position_mask in enumerate(POSITION_MASKS):
            if region & arena_mask & position_mask:
                arena_total += probabilities[arena][offset + 1]
        total *= arena_total
    return total


def chances_from_regions(
    regions: Mapping[int, int],
    probabilities: ProbabilityMatrix,
) -> list[Chance]:
    """Collapse a region partition into a sorted chance table."""

    win_table: dict[int, float] = defaultdict(float)
    for region, payout in regions.items():
        win_table[payout] += region_probability(region, probabilities)

    chances: list[Chance] = []
    cumulative = 0.0
    tail = 1.0
    for value in sorted(win_table):
        probability = win_table[value]
        cumulative += probability
        chances.append(Chance(value, probability, cumulative, tail))
        tail -= probability
    return chances


def build_chances(
    selections: Sequence[Sequence[int]],
    payouts: Sequence[int],
    probabilities: ProbabilityMatrix,
) -> list[Chance]:
    """Return the chance table for bets on ``selections`` paying ``payouts``."""

    return chances_from_regions(expand_outcomes(selections, payouts), probabilities)


def is_guaranteed_win(
    bust: Chance | None,
    odds: Sequence[int],
    amounts: Sequence[int | None] | None,
) -> bool:
    """Whether every outcome returns more than the largest single stake.

    Requires a bet set that cannot bust and a defined, non-zero stake on
    every bet.
    """

    if bust is not None or not amounts or not odds:
        return False
    if len(amounts) != len(odds):
        return False
    if any(not amount for amount in amounts):
        return False
    stakes = [int(amount) for amount in amounts if amount]
    highest_stake = max(stakes)
    lowest_return = min(bet_odds * stake for bet_odds, stake in zip(odds, stakes))
    return highest_stake < lowest_return


class OddsSummary:
    """Summary statistics over a chance table."""

    def __init__(self, chances: Sequence[Chance], bet_count: int) -> None:
        if not chances:
            raise ValueError("A chance table always has at least one entry")
        self._chances = tuple(chances)
        self.bet_count = bet_count

    @classmethod
    def from_bets(
        cls,
        selections: Sequence[Sequence[int]],
        payouts: Sequence[int],
        probabilities: ProbabilityMatrix,
    ) -> "OddsSummary":
        return cls(build_chances(selections, payouts, probabilities), len(selections))

    @property
    def chances(self) -> tuple[Chance, ...]:
        return self._chances

    @property
    def bust(self) -> Chance | None:
        """Chance of winning nothing, or ``None`` when the set cannot bust."""

        first = self._chances[0]
        return first if first.value == 0 else None

    @property
    def best(self) -> Chance:
        return self._chances[-1]

    @property
    def most_likely_winner(self) -> Chance | None:
        """Most probable non-zero payout; ties go to the smaller payout."""

        winners = [chance for chance in self._chances if chance.value > 0]
        if not winners:
            return None
        return max(winners, key=lambda chance: (chance.probability, -chance.value))

    @property
    def partial_rate(self) -> float:
        """Probability of a payout strictly between zero and the bet count."""

        return sum(
            chance.probability
            for chance in self._chances
            if 0 < chance.value < self.bet_count
        )

    def to_frame(self) -> pl.DataFrame:
        return pl.DataFrame(
            [dataclasses.asdict(chance) for chance in self._chances],
            schema={
                "value": pl.Int64,
                "probability": pl.Float64,
                "cumulative": pl.Float64,
                "tail": pl.Float64,
            },
        )

    def __repr__(self) -> str:
        return f"OddsSummary(bet_count={self.bet_count}, entries={len(self._chances)})"


__all__ = [
    "Chance",
    "OddsSummary",
    "build_chances",
    "chances_from_regions",
    "is_guaranteed_win",
    "region_probability",
]
