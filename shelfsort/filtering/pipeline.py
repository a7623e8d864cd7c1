"""
Collection Pipeline — Filter, Annotate and Sort a Collection.

Applies the active FilterState to a raw collection in a fixed order
(authoritative):
1. Expansion filter
2. Invalid player count projection (poll entries outside the game's range)
3. Criterion filters: player count, playtime, complexity, ratings
4. Annotation (is_player_count_within_range on every poll entry)
5. Not-recommended filter
6. Sort (score sort for a narrowed player count, name sort otherwise)

INVARIANTS:
- Pure and deterministic: same (state, items) -> same, identically ordered output
- Source items are never mutated; annotated copies are returned
- Empty collections and empty polls are valid input
- The stage tap observes survivors only; it never alters them
"""

import dataclasses
import logging
import math
import unicodedata
from collections.abc import Callable, Sequence

from shelfsort.config import settings
from shelfsort.filtering.range_controls import RANGE_CONTROLS
from shelfsort.models.collection import (
    AnnotatedItem,
    AnnotatedPollEntry,
    CollectionItem,
    PollEntry,
)
from shelfsort.models.filter_state import FilterState, RangeValue

logger = logging.getLogger(__name__)

# Games with more "not recommended" votes than this at every in-range count are hidden
NOT_RECOMMENDED_THRESHOLD = 50

# Called at every stage boundary with the stage name and the surviving items
StageTap = Callable[[str, Sequence[CollectionItem]], None]


def log_stage(stage: str, items: Sequence[CollectionItem]) -> None:
    """Default debug tap: log id and name of every surviving item."""
    logger.info(
        "pipeline_stage",
        extra={
            "stage": stage,
            "count": len(items),
            "items": [{"id": item.id, "name": item.name} for item in items],
        },
    )


def _in_range(value: float, filter_range: RangeValue) -> bool:
    low, high = filter_range
    return low <= value <= high


# =============================================================================
# STAGES
# =============================================================================


def _show_expansions(state: FilterState, items: list[CollectionItem]) -> list[CollectionItem]:
    if state.show_expansions:
        return items
    return [item for item in items if not item.is_expansion]


def _project_valid_player_counts(
    state: FilterState, items: list[CollectionItem]
) -> list[CollectionItem]:
    """Drop poll entries outside each game's own [min_players, max_players]."""
    if state.show_invalid_player_count:
        return items
    return [
        dataclasses.replace(
            item,
            poll=tuple(
                entry
                for entry in item.poll
                if item.min_players <= entry.player_count_value <= item.max_players
            ),
        )
        for item in items
    ]


def _annotate_entry(entry: PollEntry, player_count_range: RangeValue) -> AnnotatedPollEntry:
    return AnnotatedPollEntry(
        numplayers=entry.numplayers,
        player_count_value=entry.player_count_value,
        sort_score=entry.sort_score,
        not_recommended_percent=entry.not_recommended_percent,
        best_percent=entry.best_percent,
        recommended_percent=entry.recommended_percent,
        is_player_count_within_range=_in_range(entry.player_count_value, player_count_range),
    )


def _annotate(state: FilterState, items: list[CollectionItem]) -> list[AnnotatedItem]:
    """Mark which poll entries fall inside the active player count range."""
    player_count_range = state.player_count_range
    annotated: list[AnnotatedItem] = []
    for item in items:
        fields = {f.name: getattr(item, f.name) for f in dataclasses.fields(item)}
        fields["poll"] = tuple(_annotate_entry(entry, player_count_range) for entry in item.poll)
        annotated.append(AnnotatedItem(**fields))
    return annotated


def _is_acceptable(entry: AnnotatedPollEntry) -> bool:
    # Missing vote data is not a "not recommended" verdict
    return (
        math.isnan(entry.not_recommended_percent)
        or entry.not_recommended_percent <= NOT_RECOMMENDED_THRESHOLD
    )


def _show_not_recommended(state: FilterState, items: list[AnnotatedItem]) -> list[AnnotatedItem]:
    if state.show_not_recommended or state.show_invalid_player_count:
        return items
    return [
        item
        for item in items
        if any(entry.is_player_count_within_range and _is_acceptable(entry) for entry in item.poll)
    ]


def sort_score_sum(item: CollectionItem, player_count_range: RangeValue) -> float:
    """Sum of sort scores over poll entries inside the player count range."""
    return sum(
        entry.sort_score
        for entry in item.poll
        if _in_range(entry.player_count_value, player_count_range)
    )


def collation_key(name: str) -> tuple[str, str]:
    """
    Locale-style sort key for game names.

    Accents and case are ignored first ("Éclipse" sorts with "Eclipse");
    the casefolded original breaks ties so the order stays total.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name.casefold())


def _sort(state: FilterState, items: list[AnnotatedItem]) -> list[AnnotatedItem]:
    if not state.is_default_player_count:
        player_count_range = state.player_count_range
        # sorted() is stable, so equal scores keep their incoming order
        return sorted(items, key=lambda item: sort_score_sum(item, player_count_range), reverse=True)
    return sorted(items, key=lambda item: collation_key(item.name))


# =============================================================================
# PIPELINE
# =============================================================================


def apply_filters_and_sorts(
    state: FilterState,
    items: Sequence[CollectionItem],
    tap: StageTap | None = None,
) -> list[AnnotatedItem]:
    """
    Filter, annotate and sort a collection.

    Args:
        state: The active filter state
        items: The raw collection (left untouched)
        tap: Stage observer, defaults to `log_stage`. Only invoked when
            debugging is on (the `debug` query parameter or the
            pipeline debug setting).

    Returns:
        New list of annotated items in display order
    """
    debugging = state.is_debug or settings.pipeline_debug_override
    stage_tap = tap or log_stage

    def observe(stage: str, survivors: Sequence[CollectionItem]) -> None:
        if debugging:
            stage_tap(stage, tuple(survivors))

    current = list(items)
    observe("all_games", current)

    current = _show_expansions(state, current)
    observe("show_expansions", current)

    current = _project_valid_player_counts(state, current)

    for control in RANGE_CONTROLS:
        predicate = control.is_within_range(state)
        current = [item for item in current if predicate(item)]
        observe(f"{control.state_field}_within_range", current)

    annotated = _annotate(state, current)

    annotated = _show_not_recommended(state, annotated)
    observe("show_not_recommended", annotated)

    return _sort(state, annotated)
