"""Input adapters that normalize roster files and injury histories."""

from .roster import (
    DEFAULT_ROSTER_MAPPING,
    InjuryHistoryStore,
    RosterRow,
    RosterSource,
    load_injury_histories,
    load_roster_csv,
    rows_to_inputs,
)

__all__ = [
    "DEFAULT_ROSTER_MAPPING",
    "InjuryHistoryStore",
    "RosterRow",
    "RosterSource",
    "load_injury_histories",
    "load_roster_csv",
    "rows_to_inputs",
]
