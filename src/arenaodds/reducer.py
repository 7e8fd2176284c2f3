"""Partition refinement of the outcome space for a set of bets.

Every round ends with exactly one winner per arena, so there are ``4 ** 5``
possible outcomes.  Rather than scoring each outcome, bets are folded into a
map of disjoint *regions* (constraint patterns using the mask layout from
:mod:`arenaodds.bits`) tagged with the total payout a winner inside the
region collects.  The cost grows with the number of bets, not with the size
of the outcome space.
"""

from __future__ import annotations

import dataclasses
import itertools
import logging
from collections import defaultdict
from typing import Iterable, Iterator, Sequence

from .bits import (
    ARENA_MASKS,
    COMPETITORS_PER_ARENA,
    WILDCARD,
    acceptance_pattern,
    competitor_mask,
    is_doable,
)

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class WeightedBet:
    """An acceptance pattern together with the payout it contributes."""

    pattern: int
    winnings: int


def merge_weighted_bets(
    selections: Sequence[Sequence[int]],
    payouts: Sequence[int],
) -> list[WeightedBet]:
    """Build acceptance patterns and merge bets that share one.

    The result is ordered by ascending pattern value.
    """

    if len(selections) != len(payouts):
        raise ValueError(
            "selections and payouts must be the same length "
            f"({len(selections)} != {len(payouts)})"
        )
    merged: dict[int, int] = defaultdict(int)
    for selection, payout in zip(selections, payouts):
        merged[acceptance_pattern(selection)] += int(payout)
    return [WeightedBet(pattern, winnings) for pattern, winnings in sorted(merged.items())]


def reduce_weighted_bets(bets: Iterable[WeightedBet]) -> dict[int, int]:
    """Fold weighted bets into a disjoint partition of the outcome space.

    Bets are applied in the order given.  After each bet the keys of the
    returned map are pairwise disjoint, cover every outcome, and are doable.
    """

    regions: dict[int, int] = {WILDCARD: 0}
    for bet in bets:
        overlapping = [key for key in regions if is_doable(bet.pattern & key)]
        for key in overlapping:
            common = bet.pattern & key
            previous = regions.pop(key)
            regions[common] = previous + bet.winnings
            for arena_mask in ARENA_MASKS:
                leftover = key ^ (common & arena_mask)
                if not is_doable(leftover):
                    continue
                regions[leftover] = previous
                key = (key & ~arena_mask) | (common & arena_mask)
    logger.debug("Reduced bets into %d outcome regions", len(regions))
    return regions


def expand_outcomes(
    selections: Sequence[Sequence[int]],
    payouts: Sequence[int],
) -> dict[int, int]:
    """Return the region to payout partition for bets on ``selections``."""

    return reduce_weighted_bets(merge_weighted_bets(selections, payouts))


def region_outcomes(region: int) -> Iterator[tuple[int, ...]]:
    """Yield every concrete winner combination accepted by ``region``.

    Combinations are tuples of competitor positions (1-4), one per arena.
    """

    accepted = [
        [
            position
            for position in range(1, COMPETITORS_PER_ARENA + 1)
            if region & competitor_mask(position, arena)
        ]
        for arena in range(len(ARENA_MASKS))
    ]
    return itertools.product(*accepted)


__all__ = [
    "WeightedBet",
    "expand_outcomes",
    "merge_weighted_bets",
    "reduce_weighted_bets",
    "region_outcomes",
]
