from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
import yaml

from arenaodds.config import reset_config
from arenaodds.table import SearchSpaceTable, build_search_space

PROBABILITIES: List[List[float]] = [
    [1.0, 0.4, 0.3, 0.2, 0.1],
    [1.0, 0.25, 0.25, 0.25, 0.25],
    [1.0, 0.5, 0.2, 0.2, 0.1],
    [1.0, 0.1, 0.2, 0.3, 0.4],
    [1.0, 0.7, 0.1, 0.1, 0.1],
]

ODDS: List[List[int]] = [
    [1, 2, 3, 5, 13],
    [1, 4, 4, 4, 4],
    [1, 2, 5, 5, 10],
    [1, 13, 5, 3, 2],
    [1, 2, 10, 10, 10],
]


@pytest.fixture()
def probabilities() -> List[List[float]]:
    return [list(row) for row in PROBABILITIES]


@pytest.fixture()
def odds() -> List[List[int]]:
    return [list(row) for row in ODDS]


@pytest.fixture(scope="session")
def table() -> SearchSpaceTable:
    return build_search_space(PROBABILITIES, ODDS)


@pytest.fixture()
def round_file(tmp_path: Path) -> Path:
    path = tmp_path / "round.yaml"
    path.write_text(
        yaml.safe_dump({"probabilities": PROBABILITIES, "odds": ODDS}),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()
