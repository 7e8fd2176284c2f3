"""Validated round matrices and their YAML loader.

A round is described by two 5x5 matrices, one row per arena.  Column 0 is a
placeholder (conventionally ``1``); columns 1-4 hold the per-competitor
win probability and payout odds.  Producing those numbers is the job of the
probability models upstream; this module only checks their shape.
"""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from .bits import ARENA_COUNT, COMPETITORS_PER_ARENA

logger = logging.getLogger(__name__)

_ROW_WIDTH = COMPETITORS_PER_ARENA + 1


class RoundInputError(ValueError):
    """Raised when round matrices fail validation."""


def _check_shape(rows: List[List[Any]], name: str) -> None:
    if len(rows) != ARENA_COUNT:
        raise ValueError(f"{name} must have {ARENA_COUNT} rows, got {len(rows)}")
    for index, row in enumerate(rows):
        if len(row) != _ROW_WIDTH:
            raise ValueError(
                f"{name} row {index} must have {_ROW_WIDTH} columns, got {len(row)}"
            )


class RoundMatrices(BaseModel):
    """Per-arena win probabilities and payout odds for one round."""

    probabilities: List[List[float]]
    odds: List[List[int]]

    @field_validator("probabilities")
    @classmethod
    def _validate_probabilities(cls, rows: List[List[float]]) -> List[List[float]]:
        _check_shape(rows, "probabilities")
        for arena, row in enumerate(rows):
            for value in row[1:]:
                if not 0.0 <= value <= 1.0:
                    raise ValueError(
                        f"probabilities row {arena} contains {value}, outside [0, 1]"
                    )
            total = math.fsum(row[1:])
            if not math.isclose(total, 1.0, abs_tol=1e-6):
                logger.warning(
                    "Probabilities for arena %d sum to %.6f instead of 1.0", arena, total
                )
        return rows

    @field_validator("odds")
    @classmethod
    def _validate_odds(cls, rows: List[List[int]]) -> List[List[int]]:
        _check_shape(rows, "odds")
        for arena, row in enumerate(rows):
            if any(value <= 0 for value in row):
                raise ValueError(f"odds row {arena} must contain positive integers")
        return rows


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise RoundInputError(f"Round file at {path} must be a mapping")
    return dict(data)


def parse_round_matrices(data: Dict[str, Any]) -> RoundMatrices:
    try:
        return RoundMatrices.model_validate(data)
    except ValidationError as exc:
        raise RoundInputError(str(exc)) from exc


def load_round_matrices(path: str | os.PathLike[str]) -> RoundMatrices:
    """Load and validate a round file containing ``probabilities`` and ``odds``."""

    return parse_round_matrices(_load_yaml(Path(path)))


__all__ = [
    "RoundInputError",
    "RoundMatrices",
    "load_round_matrices",
    "parse_round_matrices",
]
