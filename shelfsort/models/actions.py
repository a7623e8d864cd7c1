"""
Filter actions.

The action set is closed: `Action` is the union of every variant the
reducer handles, and the reducer matches on it exhaustively.
"""

from dataclasses import dataclass

from shelfsort.models.filter_state import RangeValue, RatingsMode


@dataclass(frozen=True, slots=True)
class SetPlayerCountRange:
    value: RangeValue


@dataclass(frozen=True, slots=True)
class SetPlaytimeRange:
    value: RangeValue


@dataclass(frozen=True, slots=True)
class SetComplexityRange:
    value: RangeValue


@dataclass(frozen=True, slots=True)
class SetRatingsRange:
    value: RangeValue


@dataclass(frozen=True, slots=True)
class SetUsername:
    value: str


@dataclass(frozen=True, slots=True)
class SetRatingsMode:
    value: RatingsMode


@dataclass(frozen=True, slots=True)
class ToggleRatingsMode:
    pass


@dataclass(frozen=True, slots=True)
class ToggleShowExpansions:
    pass


@dataclass(frozen=True, slots=True)
class ToggleShowInvalidPlayerCount:
    pass


@dataclass(frozen=True, slots=True)
class ToggleShowNotRecommended:
    pass


Action = (
    SetPlayerCountRange
    | SetPlaytimeRange
    | SetComplexityRange
    | SetRatingsRange
    | SetUsername
    | SetRatingsMode
    | ToggleRatingsMode
    | ToggleShowExpansions
    | ToggleShowInvalidPlayerCount
    | ToggleShowNotRecommended
)
