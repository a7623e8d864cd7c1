"""
Collection filtering.

Query string codec, criterion controls, the filter reducer and the
filter/annotate/sort pipeline.
"""

from shelfsort.filtering.pipeline import (
    StageTap,
    apply_filters_and_sorts,
    collation_key,
    log_stage,
    sort_score_sum,
)
from shelfsort.filtering.query_params import (
    ParamStore,
    QueryParams,
    clamp,
    encode_boolean,
    encode_range,
    parse_boolean,
    parse_range,
)
from shelfsort.filtering.range_controls import (
    RANGE_CONTROLS,
    RangeControl,
    SliderConfig,
    SliderMark,
    complexity_control,
    player_count_control,
    playtime_control,
    ratings_control,
)
from shelfsort.filtering.reducer import (
    FilterSession,
    SyncQueryParams,
    effects_for,
    initial_filter_state,
    reduce,
)
from shelfsort.filtering.sync import sync_query_params
from shelfsort.filtering.toggle_controls import (
    BOOLEAN_CONTROLS,
    BooleanControl,
    ratings_mode_control,
    username_control,
)

__all__ = [
    # Codec
    "ParamStore",
    "QueryParams",
    "clamp",
    "encode_boolean",
    "encode_range",
    "parse_boolean",
    "parse_range",
    # Controls
    "BOOLEAN_CONTROLS",
    "BooleanControl",
    "RANGE_CONTROLS",
    "RangeControl",
    "SliderConfig",
    "SliderMark",
    "complexity_control",
    "player_count_control",
    "playtime_control",
    "ratings_control",
    "ratings_mode_control",
    "username_control",
    # Reducer
    "FilterSession",
    "SyncQueryParams",
    "effects_for",
    "initial_filter_state",
    "reduce",
    "sync_query_params",
    # Pipeline
    "StageTap",
    "apply_filters_and_sorts",
    "collation_key",
    "log_stage",
    "sort_score_sum",
]
