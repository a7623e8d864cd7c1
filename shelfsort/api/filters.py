"""
Filter API endpoints.

The page's query string is the persisted filter store: every endpoint
decodes the FilterState from the request's own query parameters.
"""

import math
from typing import Annotated, Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from shelfsort.filtering import (
    RANGE_CONTROLS,
    FilterSession,
    QueryParams,
    SliderConfig,
)
from shelfsort.models import (
    Action,
    FilterState,
    RangeValue,
    RatingsMode,
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

router = APIRouter(prefix="/filters", tags=["filters"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================


class RangeResponse(BaseModel):
    """An inclusive range. `max` is null when the range is open-ended."""

    min: float
    max: float | None = None

    @classmethod
    def from_range(cls, value: RangeValue) -> "RangeResponse":
        low, high = value
        return cls(min=low, max=None if math.isinf(high) else high)


class FilterStateResponse(BaseModel):
    """Response model for the decoded filter state."""

    username: str = ""
    player_count_range: RangeResponse
    playtime_range: RangeResponse
    complexity_range: RangeResponse
    ratings_range: RangeResponse
    ratings_mode: RatingsMode
    show_invalid_player_count: bool
    show_expansions: bool
    show_not_recommended: bool
    is_debug: bool

    @classmethod
    def from_state(cls, state: FilterState) -> "FilterStateResponse":
        return cls(
            username=state.username,
            player_count_range=RangeResponse.from_range(state.player_count_range),
            playtime_range=RangeResponse.from_range(state.playtime_range),
            complexity_range=RangeResponse.from_range(state.complexity_range),
            ratings_range=RangeResponse.from_range(state.ratings_range),
            ratings_mode=state.ratings_mode,
            show_invalid_player_count=state.show_invalid_player_count,
            show_expansions=state.show_expansions,
            show_not_recommended=state.show_not_recommended,
            is_debug=state.is_debug,
        )


class SliderMarkResponse(BaseModel):
    value: float
    label: str


class SliderResponse(BaseModel):
    """Presentation configuration for one range slider."""

    query_key: str
    label: str
    min_aria_label: str
    max_aria_label: str
    min: float
    max: float
    step: float | None = Field(default=None, description="Slider step, null for continuous")
    marks: list[SliderMarkResponse] = Field(default_factory=list)
    value: tuple[float, float]
    value_labels: tuple[str, str]

    @classmethod
    def from_config(cls, config: SliderConfig) -> "SliderResponse":
        return cls(
            query_key=config.query_key,
            label=config.label,
            min_aria_label=config.min_aria_label,
            max_aria_label=config.max_aria_label,
            min=config.min,
            max=config.max,
            step=config.step,
            marks=[SliderMarkResponse(value=m.value, label=m.label) for m in config.marks],
            value=config.value,
            value_labels=config.value_labels,
        )


class FiltersResponse(BaseModel):
    """Response model for filter state, sliders and the query string."""

    state: FilterStateResponse
    sliders: list[SliderResponse] = Field(default_factory=list)
    query_string: str = Field(
        default="",
        description="Query string to put in the page URL",
    )
    synced: bool = Field(
        default=False,
        description="True if the query string was rewritten from the new state",
    )


# =============================================================================
# ACTION REQUESTS
# =============================================================================


class SetRangeRequest(BaseModel):
    """Set one of the range filters. Slider overflow ticks (e.g. 11 players) mean open-ended."""

    type: Literal[
        "SET_PLAYER_COUNT_RANGE",
        "SET_PLAYTIME_RANGE",
        "SET_COMPLEXITY",
        "SET_RATINGS",
    ]
    payload: tuple[float, float] = Field(..., examples=[[3, 4]])

    def to_action(self) -> Action:
        match self.type:
            case "SET_PLAYER_COUNT_RANGE":
                return SetPlayerCountRange(self.payload)
            case "SET_PLAYTIME_RANGE":
                return SetPlaytimeRange(self.payload)
            case "SET_COMPLEXITY":
                return SetComplexityRange(self.payload)
            case "SET_RATINGS":
                return SetRatingsRange(self.payload)


class SetUsernameRequest(BaseModel):
    type: Literal["SET_USERNAME"]
    payload: str = Field(..., max_length=100)

    def to_action(self) -> Action:
        return SetUsername(self.payload)


class SetRatingsModeRequest(BaseModel):
    type: Literal["SET_SHOW_RATINGS"]
    payload: RatingsMode

    def to_action(self) -> Action:
        return SetRatingsMode(self.payload)


class ToggleRequest(BaseModel):
    type: Literal[
        "TOGGLE_SHOW_RATINGS",
        "TOGGLE_SHOW_EXPANSIONS",
        "TOGGLE_SHOW_INVALID_PLAYER_COUNT",
        "TOGGLE_SHOW_NOT_RECOMMENDED_PLAYER_COUNT",
    ]

    def to_action(self) -> Action:
        match self.type:
            case "TOGGLE_SHOW_RATINGS":
                return ToggleRatingsMode()
            case "TOGGLE_SHOW_EXPANSIONS":
                return ToggleShowExpansions()
            case "TOGGLE_SHOW_INVALID_PLAYER_COUNT":
                return ToggleShowInvalidPlayerCount()
            case "TOGGLE_SHOW_NOT_RECOMMENDED_PLAYER_COUNT":
                return ToggleShowNotRecommended()


ActionRequest = Annotated[
    SetRangeRequest | SetUsernameRequest | SetRatingsModeRequest | ToggleRequest,
    Field(discriminator="type"),
]


class DispatchRequest(BaseModel):
    """Request model for dispatching one filter action."""

    action: ActionRequest


# =============================================================================
# HELPERS
# =============================================================================


def query_params_from_request(request: Request) -> QueryParams:
    """The request's own query string is the persisted filter store."""
    return QueryParams.from_query_string(request.url.query)


def build_filters_response(session: FilterSession, synced: bool = False) -> FiltersResponse:
    state = session.state
    return FiltersResponse(
        state=FilterStateResponse.from_state(state),
        sliders=[
            SliderResponse.from_config(control.get_presentation_config(state))
            for control in RANGE_CONTROLS
        ],
        query_string=session.query_string(),
        synced=synced,
    )


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.get("", response_model=FiltersResponse)
async def get_filters(request: Request) -> FiltersResponse:
    """
    Decode the filter state from the query string.

    Malformed or out-of-range parameters fall back to defaults or are
    clamped; this endpoint never rejects a query string.
    """
    session = FilterSession(query_params_from_request(request))
    return build_filters_response(session)


@router.post("/dispatch", response_model=FiltersResponse)
async def dispatch_filter_action(request: Request, body: DispatchRequest) -> FiltersResponse:
    """
    Apply one filter action to the state encoded in the query string.

    When the resulting state has a username, the returned query string is
    rewritten to encode it; otherwise the query string comes back unchanged.
    """
    session = FilterSession(query_params_from_request(request))
    new_state = session.dispatch(body.action.to_action())
    return build_filters_response(session, synced=new_state.has_session)
