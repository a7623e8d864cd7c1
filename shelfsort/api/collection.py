"""
Collection API endpoints.

Applies the filter state encoded in the query string to a collection the
client already fetched, and returns the annotated, ordered view.
"""

import logging
import math

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from shelfsort.api.filters import FilterStateResponse, query_params_from_request
from shelfsort.config import MAX_COLLECTION_ITEMS
from shelfsort.filtering import apply_filters_and_sorts, initial_filter_state
from shelfsort.models import (
    BOARD_GAME_TYPE,
    RATING_NOT_AVAILABLE,
    AnnotatedItem,
    AnnotatedPollEntry,
    CollectionItem,
    CollectionTooLargeError,
    PollEntry,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/collection", tags=["collection"])


class PollEntryPayload(BaseModel):
    """One player count bucket of the community poll."""

    numplayers: int | str = Field(..., examples=[3, "4+"])
    player_count_value: int | None = Field(
        default=None,
        description="Comparable player count; derived from numplayers when omitted",
    )
    sort_score: float = 0.0
    not_recommended_percent: float | None = Field(
        default=None,
        description="Share of 'not recommended' votes; null when there is no data",
    )
    best_percent: float = 0.0
    recommended_percent: float = 0.0

    def to_entry(self) -> PollEntry:
        entry = PollEntry.from_label(
            self.numplayers,
            sort_score=self.sort_score,
            not_recommended_percent=self.not_recommended_percent,
            best_percent=self.best_percent,
            recommended_percent=self.recommended_percent,
        )
        if self.player_count_value is None:
            return entry
        return PollEntry(
            numplayers=entry.numplayers,
            player_count_value=self.player_count_value,
            sort_score=entry.sort_score,
            not_recommended_percent=entry.not_recommended_percent,
            best_percent=entry.best_percent,
            recommended_percent=entry.recommended_percent,
        )


class CollectionItemPayload(BaseModel):
    """One game as delivered by the catalog fetch."""

    id: int
    name: str
    type: str = BOARD_GAME_TYPE
    min_players: int
    max_players: int
    user_rating: float | str = RATING_NOT_AVAILABLE
    average_rating: float
    average_weight: float = Field(..., description="Community complexity weight (1-5)")
    min_playtime: float = 0
    max_playtime: float = 0
    thumbnail: str | None = None
    poll: list[PollEntryPayload] = Field(default_factory=list)

    def to_item(self) -> CollectionItem:
        return CollectionItem(
            id=self.id,
            name=self.name,
            type=self.type,
            min_players=self.min_players,
            max_players=self.max_players,
            user_rating=self.user_rating,
            average_rating=self.average_rating,
            average_weight=self.average_weight,
            min_playtime=self.min_playtime,
            max_playtime=self.max_playtime,
            poll=tuple(entry.to_entry() for entry in self.poll),
            thumbnail=self.thumbnail,
        )


class CollectionViewRequest(BaseModel):
    """Request model for filtering a collection."""

    items: list[CollectionItemPayload] = Field(default_factory=list)


class AnnotatedPollEntryResponse(BaseModel):
    numplayers: int | str
    player_count_value: int
    sort_score: float
    not_recommended_percent: float | None = None
    best_percent: float
    recommended_percent: float
    is_player_count_within_range: bool

    @classmethod
    def from_entry(cls, entry: AnnotatedPollEntry) -> "AnnotatedPollEntryResponse":
        not_recommended = entry.not_recommended_percent
        return cls(
            numplayers=entry.numplayers,
            player_count_value=entry.player_count_value,
            sort_score=entry.sort_score,
            not_recommended_percent=None if math.isnan(not_recommended) else not_recommended,
            best_percent=entry.best_percent,
            recommended_percent=entry.recommended_percent,
            is_player_count_within_range=entry.is_player_count_within_range,
        )


class AnnotatedItemResponse(BaseModel):
    id: int
    name: str
    type: str
    min_players: int
    max_players: int
    user_rating: float | str
    average_rating: float
    average_weight: float
    min_playtime: float
    max_playtime: float
    thumbnail: str | None = None
    poll: list[AnnotatedPollEntryResponse] = Field(default_factory=list)

    @classmethod
    def from_item(cls, item: AnnotatedItem) -> "AnnotatedItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            type=item.type,
            min_players=item.min_players,
            max_players=item.max_players,
            user_rating=item.user_rating,
            average_rating=item.average_rating,
            average_weight=item.average_weight,
            min_playtime=item.min_playtime,
            max_playtime=item.max_playtime,
            thumbnail=item.thumbnail,
            poll=[AnnotatedPollEntryResponse.from_entry(entry) for entry in item.poll],
        )


class CollectionViewResponse(BaseModel):
    """Response model for a filtered collection view."""

    state: FilterStateResponse
    total_items: int = Field(default=0, description="Items received")
    shown_items: int = Field(default=0, description="Items left after filtering")
    items: list[AnnotatedItemResponse] = Field(default_factory=list)


@router.post("/view", response_model=CollectionViewResponse)
async def view_collection(request: Request, body: CollectionViewRequest) -> CollectionViewResponse:
    """
    Filter, annotate and sort a collection.

    The filter state is decoded from this request's query string, so the
    page can forward its own URL parameters unchanged.
    """
    if len(body.items) > MAX_COLLECTION_ITEMS:
        raise CollectionTooLargeError(len(body.items), MAX_COLLECTION_ITEMS)

    state = initial_filter_state(query_params_from_request(request))
    items = [payload.to_item() for payload in body.items]
    view = apply_filters_and_sorts(state, items)

    logger.info(
        "collection_viewed",
        extra={"username": state.username, "total": len(items), "shown": len(view)},
    )

    return CollectionViewResponse(
        state=FilterStateResponse.from_state(state),
        total_items=len(items),
        shown_items=len(view),
        items=[AnnotatedItemResponse.from_item(item) for item in view],
    )
