"""Command line interface for arenaodds."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from typing import Callable, Sequence

import polars as pl

from .bets import BetSet
from .bits import ARENA_COUNT, COMPETITORS_PER_ARENA
from .codec import (
    amounts_hash_to_bet_amounts,
    bets_hash_to_selections,
    bets_hash_value,
)
from .config import ArenaOddsConfig, get_config
from .logging import configure_logging
from .round_input import RoundInputError, load_round_matrices
from .table import SearchSpaceTable, build_search_space

logger = logging.getLogger(__name__)

CommandHandler = Callable[[ArenaOddsConfig, argparse.Namespace], None]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclasses.dataclass(slots=True)
class Subcommand:
    """Container describing a CLI sub-command."""

    name: str
    help: str
    configure: Callable[[argparse.ArgumentParser], None]
    handler: CommandHandler

    def add_to_parser(
        self,
        subparsers,
        parent: argparse.ArgumentParser,
    ) -> argparse.ArgumentParser:
        """Create the parser for this subcommand."""

        parser = subparsers.add_parser(self.name, parents=[parent], help=self.help)
        self.configure(parser)
        parser.set_defaults(handler=self.handler, command=self.name)
        return parser


class SubcommandApp:
    """Registry that wires handlers into an :class:`argparse` parser."""

    def __init__(self, description: str | None = None) -> None:
        self._commands: list[Subcommand] = []
        self._description = description

    def command(
        self,
        name: str,
        *,
        help: str,
        configure: Callable[[argparse.ArgumentParser], None],
    ) -> Callable[[CommandHandler], CommandHandler]:
        """Register ``handler`` as a sub-command with configuration callback."""

        def _decorator(handler: CommandHandler) -> CommandHandler:
            self._commands.append(
                Subcommand(name=name, help=help, configure=configure, handler=handler)
            )
            return handler

        return _decorator

    @property
    def commands(self) -> Sequence[Subcommand]:
        return tuple(self._commands)

    def build_parser(self) -> argparse.ArgumentParser:
        parent = argparse.ArgumentParser(add_help=False)
        parent.add_argument(
            "--log-level",
            dest="log_level",
            type=str.upper,
            choices=LOG_LEVELS,
        )

        parser = argparse.ArgumentParser(description=self._description)
        subparsers = parser.add_subparsers(dest="command", required=True)
        for command in self._commands:
            command.add_to_parser(subparsers, parent)
        return parser


APP = SubcommandApp(description=__doc__)


def _parse_selection(raw: str) -> list[int]:
    try:
        values = [int(token) for token in raw.split(",")]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid selection: {raw!r}") from exc
    if len(values) != ARENA_COUNT or any(
        not 0 <= value <= COMPETITORS_PER_ARENA for value in values
    ):
        raise argparse.ArgumentTypeError(
            f"Selections need {ARENA_COUNT} comma separated values between 0 and "
            f"{COMPETITORS_PER_ARENA}: {raw!r}"
        )
    return values


def _load_table(path: str) -> SearchSpaceTable:
    try:
        matrices = load_round_matrices(path)
    except (FileNotFoundError, RoundInputError) as exc:
        raise SystemExit(f"Unable to load round file {path}: {exc}") from exc
    return build_search_space(matrices.probabilities, matrices.odds)


def _configure_decode_bets(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("bets_hash")


@APP.command("decode-bets", help="Decode a bets hash into selections", configure=_configure_decode_bets)
def _handle_decode_bets(config: ArenaOddsConfig, args: argparse.Namespace) -> None:
    del config
    selections = bets_hash_to_selections(args.bets_hash)
    print(json.dumps([list(selection) for selection in selections]))


def _configure_encode_bets(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("selections", nargs="+", type=_parse_selection)


@APP.command("encode-bets", help="Encode selections into a bets hash", configure=_configure_encode_bets)
def _handle_encode_bets(config: ArenaOddsConfig, args: argparse.Namespace) -> None:
    del config
    print(bets_hash_value(args.selections))


def _configure_decode_amounts(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("amounts_hash")


@APP.command(
    "decode-amounts",
    help="Decode an amounts hash into stakes",
    configure=_configure_decode_amounts,
)
def _handle_decode_amounts(config: ArenaOddsConfig, args: argparse.Namespace) -> None:
    del config
    print(json.dumps(amounts_hash_to_bet_amounts(args.amounts_hash)))


def _configure_table(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--round", dest="round_file", required=True)
    parser.add_argument("--top", type=int, default=10)


@APP.command("table", help="Show the best bets by expected return", configure=_configure_table)
def _handle_table(config: ArenaOddsConfig, args: argparse.Namespace) -> None:
    del config
    table = _load_table(args.round_file)
    frame = table.to_frame().sort("expected_return", descending=True).head(args.top)
    with pl.Config(tbl_rows=args.top, tbl_cols=-1):
        print(frame)


def _configure_chances(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--round", dest="round_file", required=True)
    parser.add_argument("--bets", dest="bets_hash", required=True)
    parser.add_argument("--amounts", dest="amounts_hash")


@APP.command(
    "chances",
    help="Show the win-amount distribution of a bet set",
    configure=_configure_chances,
)
def _handle_chances(config: ArenaOddsConfig, args: argparse.Namespace) -> None:
    table = _load_table(args.round_file)
    bets = BetSet.from_hash(table, args.bets_hash)
    if len(bets) > config.bet_limit:
        logger.warning(
            "Bet set has %d bets, above the configured limit of %d",
            len(bets),
            config.bet_limit,
        )
    if args.amounts_hash:
        bets.set_bet_amounts(args.amounts_hash)
    elif config.default_bet_amount is not None:
        bets.fill_bet_amounts(config.default_bet_amount)

    summary = bets.summary
    with pl.Config(tbl_rows=-1):
        print(summary.to_frame())
    bust = summary.bust
    most_likely = summary.most_likely_winner
    report = {
        "bets": len(bets),
        "bust_probability": bust.probability if bust else 0.0,
        "best": dataclasses.asdict(summary.best),
        "most_likely_winner": dataclasses.asdict(most_likely) if most_likely else None,
        "partial_rate": summary.partial_rate,
        "expected_return": bets.expected_return(),
        "guaranteed_win": bets.is_guaranteed_win(),
        "amounts_hash": bets.amounts_hash,
    }
    print(json.dumps(report, indent=2))


def _build_parser() -> argparse.ArgumentParser:
    return APP.build_parser()


def _dispatch(args: argparse.Namespace) -> None:
    config = get_config()
    handler: CommandHandler = args.handler
    try:
        configure_logging(args.log_level or config.log_level)
        handler(config, args)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _dispatch(args)


__all__ = ["main"]


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
