"""
arenaodds: exact outcome distributions for five-arena fantasy wagering rounds.

The package enumerates every legal bet of a round, folds any chosen bet set
into a disjoint partition of the possible results, and derives the exact
win-amount distribution from it.  It also implements the frozen bets and
amounts hash formats used to share bet sets.
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover - exercised in packaging workflows
    __version__ = version("arenaodds")
except PackageNotFoundError:  # pragma: no cover - local editable installs
    __version__ = "0.0.0"

_EXPORTS = {
    # Bit encoding
    "competitor_mask": ".bits",
    "selection_mask": ".bits",
    "mask_to_selection": ".bits",
    "random_full_mask": ".bits",
    # Search space
    "SearchSpaceTable": ".table",
    "build_search_space": ".table",
    # Outcome distribution
    "WeightedBet": ".reducer",
    "expand_outcomes": ".reducer",
    "Chance": ".chances",
    "OddsSummary": ".chances",
    "build_chances": ".chances",
    # Bet sets
    "BetSet": ".bets",
    # Hashes
    "InvalidHashError": ".codec",
    "bets_hash_value": ".codec",
    "bets_hash_to_selections": ".codec",
    "bet_amounts_to_amounts_hash": ".codec",
    "amounts_hash_to_bet_amounts": ".codec",
    # Round input
    "RoundMatrices": ".round_input",
    "load_round_matrices": ".round_input",
}

__all__ = sorted(_EXPORTS)


def __getattr__(name: str) -> object:  # pragma: no cover - thin lazy importer
    from importlib import import_module

    target_module = _EXPORTS.get(name)
    if not target_module:
        raise AttributeError(f"module {__name__} has no attribute {name}")
    module = import_module(target_module, __name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


def __dir__() -> list[str]:  # pragma: no cover - trivial
    return sorted(list(globals().keys()) + __all__)
