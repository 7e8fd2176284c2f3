"""Tests for the logging helper."""

from __future__ import annotations

import pytest

from arenaodds.logging import configure_logging


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level: bogus"):
        configure_logging("bogus")
