from shelfsort.models.actions import (
    Action,
    SetComplexityRange,
    SetPlayerCountRange,
    SetPlaytimeRange,
    SetRatingsMode,
    SetRatingsRange,
    SetUsername,
    ToggleRatingsMode,
    ToggleShowExpansions,
    ToggleShowInvalidPlayerCount,
    ToggleShowNotRecommended,
)
from shelfsort.models.collection import (
    BOARD_GAME_TYPE,
    RATING_NOT_AVAILABLE,
    AnnotatedItem,
    AnnotatedPollEntry,
    CollectionItem,
    PollEntry,
    parse_player_count_label,
)
from shelfsort.models.failure import (
    CollectionTooLargeError,
    ErrorEnvelope,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    UnhandledActionError,
)
from shelfsort.models.filter_state import (
    DEFAULT_COMPLEXITY_RANGE,
    DEFAULT_PLAYER_COUNT_RANGE,
    DEFAULT_PLAYTIME_RANGE,
    DEFAULT_RATINGS_RANGE,
    FilterState,
    RangeValue,
    RatingsMode,
)

__all__ = [
    "Action",
    "AnnotatedItem",
    "AnnotatedPollEntry",
    "CollectionTooLargeError",
    "BOARD_GAME_TYPE",
    "CollectionItem",
    "DEFAULT_COMPLEXITY_RANGE",
    "DEFAULT_PLAYER_COUNT_RANGE",
    "DEFAULT_PLAYTIME_RANGE",
    "DEFAULT_RATINGS_RANGE",
    "ErrorEnvelope",
    "FailureDetail",
    "FailureKind",
    "FilterState",
    "KnownError",
    "OutcomeType",
    "PollEntry",
    "RATING_NOT_AVAILABLE",
    "RangeValue",
    "RatingsMode",
    "SetComplexityRange",
    "SetPlayerCountRange",
    "SetPlaytimeRange",
    "SetRatingsMode",
    "SetRatingsRange",
    "SetUsername",
    "ToggleRatingsMode",
    "ToggleShowExpansions",
    "ToggleShowInvalidPlayerCount",
    "ToggleShowNotRecommended",
    "UnhandledActionError",
    "parse_player_count_label",
]
