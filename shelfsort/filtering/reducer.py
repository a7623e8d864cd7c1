"""
Filter Reducer — the single writer of FilterState.

`reduce()` is a pure transition from (state, action) to a new state.
Side effects are described separately by `effects_for()` and carried out
by `FilterSession`, which serializes dispatches so every action resolves
fully (including its query string sync) before the next one starts.

INVARIANTS:
- The action set is closed; anything else is a programming error
- reduce() never mutates its input and never touches the store
- Readers of FilterSession.state only ever see settled snapshots
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from threading import Lock
from typing import Never, NoReturn

from shelfsort.filtering.query_params import ParamStore, QueryParams
from shelfsort.filtering.range_controls import (
    complexity_control,
    player_count_control,
    playtime_control,
    ratings_control,
)
from shelfsort.filtering.sync import sync_query_params
from shelfsort.filtering.toggle_controls import (
    debug_control,
    ratings_mode_control,
    show_expansions_control,
    show_invalid_player_count_control,
    show_not_recommended_control,
    username_control,
)
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
from shelfsort.models.failure import UnhandledActionError
from shelfsort.models.filter_state import FilterState

logger = logging.getLogger(__name__)

_toggle_show_expansions = show_expansions_control.get_reduced_state()
_toggle_show_invalid_player_count = show_invalid_player_count_control.get_reduced_state()
_toggle_show_not_recommended = show_not_recommended_control.get_reduced_state()


def initial_filter_state(store: ParamStore) -> FilterState:
    """Decode a complete FilterState from the query string store."""
    return FilterState(
        username=username_control.get_initial_state(store),
        player_count_range=player_count_control.get_initial_state(store),
        playtime_range=playtime_control.get_initial_state(store),
        complexity_range=complexity_control.get_initial_state(store),
        ratings_range=ratings_control.get_initial_state(store),
        ratings_mode=ratings_mode_control.get_initial_state(store),
        show_invalid_player_count=show_invalid_player_count_control.get_initial_state(store),
        show_expansions=show_expansions_control.get_initial_state(store),
        show_not_recommended=show_not_recommended_control.get_initial_state(store),
        is_debug=debug_control.get_initial_state(store),
    )


def _unhandled(action: Never) -> NoReturn:
    raise UnhandledActionError(action)


def reduce(state: FilterState, action: Action) -> FilterState:
    """Apply one action. Pure: the result depends only on (state, action)."""
    match action:
        case SetPlayerCountRange(value=value):
            return player_count_control.get_reduced_state(state, value)
        case SetPlaytimeRange(value=value):
            return playtime_control.get_reduced_state(state, value)
        case SetComplexityRange(value=value):
            return complexity_control.get_reduced_state(state, value)
        case SetRatingsRange(value=value):
            return ratings_control.get_reduced_state(state, value)
        case SetUsername(value=username):
            return username_control.get_reduced_state(state, username)
        case SetRatingsMode(value=mode):
            return ratings_mode_control.get_reduced_state(state, mode)
        case ToggleRatingsMode():
            return ratings_mode_control.get_toggled_state(state)
        case ToggleShowExpansions():
            return _toggle_show_expansions(state, None)
        case ToggleShowInvalidPlayerCount():
            return _toggle_show_invalid_player_count(state, None)
        case ToggleShowNotRecommended():
            return _toggle_show_not_recommended(state, None)
        case _:
            _unhandled(action)


# =============================================================================
# EFFECTS
# =============================================================================


@dataclass(frozen=True, slots=True)
class SyncQueryParams:
    """Write `state` into the query string."""

    state: FilterState


Effect = SyncQueryParams


def effects_for(state: FilterState) -> list[Effect]:
    """Effects to run after committing `state`. Nothing without a username."""
    if not state.has_session:
        return []
    return [SyncQueryParams(state)]


# =============================================================================
# SESSION DRIVER
# =============================================================================


class FilterSession:
    """
    Owns one session's FilterState and query string.

    Every dispatch holds the lock through the transition and its effects,
    so concurrent callers cannot interleave and lose updates. The query
    string is replaced at most once per dispatched action.

    Usage:
        session = FilterSession.from_query_string("username=alice&playerCount=3")
        session.dispatch(ToggleShowExpansions())
        session.query_string()  # "username=alice&playerCount=3&showExpansions=true"
    """

    def __init__(
        self,
        store: QueryParams | None = None,
        on_commit: Callable[[QueryParams], None] | None = None,
    ):
        self._lock = Lock()
        self._store = store if store is not None else QueryParams()
        self._state = initial_filter_state(self._store)
        self._on_commit = on_commit

    @classmethod
    def from_query_string(
        cls,
        raw: str | None,
        on_commit: Callable[[QueryParams], None] | None = None,
    ) -> "FilterSession":
        return cls(QueryParams.from_query_string(raw), on_commit=on_commit)

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def store(self) -> QueryParams:
        """A copy of the committed query string store."""
        with self._lock:
            return self._store.copy()

    def query_string(self) -> str:
        return self.store.to_query_string()

    def dispatch(self, action: Action) -> FilterState:
        with self._lock:
            new_state = reduce(self._state, action)
            self._state = new_state
            for effect in effects_for(new_state):
                self._run(effect)

        logger.debug(
            "filters_dispatched",
            extra={"action": type(action).__name__, "username": new_state.username},
        )
        return new_state

    def replay(self, actions: Iterable[Action]) -> FilterState:
        state = self._state
        for action in actions:
            state = self.dispatch(action)
        return state

    def _run(self, effect: Effect) -> None:
        snapshot = self._store.copy()
        if sync_query_params(effect.state, snapshot):
            self._store = snapshot
            if self._on_commit is not None:
                self._on_commit(snapshot.copy())
