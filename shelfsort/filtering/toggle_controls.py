"""
Boolean, ratings-mode and username controls.

These share the shape of the range controls (initial state, transition,
query string encoding) without a slider or a membership predicate.
"""

import dataclasses
from collections.abc import Callable

from shelfsort.filtering.query_params import (
    ParamStore,
    encode_boolean,
    maybe_set_query_param,
    parse_boolean,
)
from shelfsort.models.filter_state import FilterState, RatingsMode

StateTransition = Callable[[FilterState, object], FilterState]


class BooleanControl:
    """
    An on/off filter stored under one FilterState field and one query key.

    Absent from the query string means False.
    """

    def __init__(self, state_field: str, query_key: str):
        self.state_field = state_field
        self.query_key = query_key

    def get_initial_state(self, store: ParamStore) -> bool:
        return parse_boolean(store.get(self.query_key))

    def get_reduced_state(self) -> StateTransition:
        """Return a transition that flips the field and ignores its payload."""

        def toggle(state: FilterState, _payload: object = None) -> FilterState:
            current: bool = getattr(state, self.state_field)
            return dataclasses.replace(state, **{self.state_field: not current})

        return toggle

    def set_query_param(self, store: ParamStore, value: bool) -> None:
        maybe_set_query_param(store, self.query_key, encode_boolean(value))

    def sync(self, store: ParamStore, state: FilterState) -> None:
        self.set_query_param(store, getattr(state, self.state_field))


show_expansions_control = BooleanControl("show_expansions", "showExpansions")
show_invalid_player_count_control = BooleanControl("show_invalid_player_count", "showInvalid")
show_not_recommended_control = BooleanControl("show_not_recommended", "showNotRec")
debug_control = BooleanControl("is_debug", "debug")

BOOLEAN_CONTROLS: tuple[BooleanControl, ...] = (
    show_expansions_control,
    show_not_recommended_control,
    show_invalid_player_count_control,
    debug_control,
)


class RatingsModeControl:
    """
    Three-valued variant of a boolean control.

    Query values are "none", "average" and "user"; anything else decodes to
    the default (average), which is omitted from the query string.
    """

    query_key = "ratingsMode"
    default = RatingsMode.AVERAGE_RATING

    _TAGS: dict[RatingsMode, str] = {
        RatingsMode.NO_RATING: "none",
        RatingsMode.AVERAGE_RATING: "average",
        RatingsMode.USER_RATING: "user",
    }
    _MODES: dict[str, RatingsMode] = {tag: mode for mode, tag in _TAGS.items()}

    # AVERAGE -> USER -> NO -> AVERAGE
    _NEXT: dict[RatingsMode, RatingsMode] = {
        RatingsMode.AVERAGE_RATING: RatingsMode.USER_RATING,
        RatingsMode.USER_RATING: RatingsMode.NO_RATING,
        RatingsMode.NO_RATING: RatingsMode.AVERAGE_RATING,
    }

    def get_initial_state(self, store: ParamStore) -> RatingsMode:
        raw = store.get(self.query_key)
        if raw is None:
            return self.default
        return self._MODES.get(raw.strip().lower(), self.default)

    def get_reduced_state(self, state: FilterState, mode: RatingsMode) -> FilterState:
        return dataclasses.replace(state, ratings_mode=RatingsMode(mode))

    def get_toggled_state(self, state: FilterState, _payload: object = None) -> FilterState:
        return dataclasses.replace(state, ratings_mode=self._NEXT[state.ratings_mode])

    def set_query_param(self, store: ParamStore, state: FilterState) -> None:
        encoded = None if state.ratings_mode == self.default else self._TAGS[state.ratings_mode]
        maybe_set_query_param(store, self.query_key, encoded)


class UsernameControl:
    """The session identity; an empty username is omitted from the query string."""

    query_key = "username"

    def get_initial_state(self, store: ParamStore) -> str:
        return (store.get(self.query_key) or "").strip()

    def get_reduced_state(self, state: FilterState, username: str) -> FilterState:
        return dataclasses.replace(state, username=username.strip())

    def set_query_param(self, store: ParamStore, state: FilterState) -> None:
        maybe_set_query_param(store, self.query_key, state.username or None)


ratings_mode_control = RatingsModeControl()
username_control = UsernameControl()
