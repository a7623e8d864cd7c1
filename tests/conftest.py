import math
from collections.abc import Callable

import pytest

from shelfsort.models.collection import CollectionItem, PollEntry


def _build_poll(
    scores: dict[int | str, float],
    not_recommended: dict[int | str, float] | None = None,
) -> tuple[PollEntry, ...]:
    """Build poll entries from {numplayers: sort_score}."""
    not_recommended = not_recommended or {}
    return tuple(
        PollEntry.from_label(
            label,
            sort_score=score,
            not_recommended_percent=not_recommended.get(label, 0.0),
        )
        for label, score in scores.items()
    )


def _build_item(
    id: int = 1,
    name: str = "Game",
    type: str = "boardgame",
    min_players: int = 1,
    max_players: int = 4,
    user_rating: float | str = "N/A",
    average_rating: float = 7.0,
    average_weight: float = 2.5,
    min_playtime: float = 30,
    max_playtime: float = 60,
    poll: tuple[PollEntry, ...] | None = None,
) -> CollectionItem:
    """Collection item with sensible defaults for tests."""
    if poll is None:
        poll = _build_poll({n: 1.0 for n in range(min_players, max_players + 1)})
    return CollectionItem(
        id=id,
        name=name,
        type=type,
        min_players=min_players,
        max_players=max_players,
        user_rating=user_rating,
        average_rating=average_rating,
        average_weight=average_weight,
        min_playtime=min_playtime,
        max_playtime=max_playtime,
        poll=poll,
    )


@pytest.fixture
def make_poll() -> Callable[..., tuple[PollEntry, ...]]:
    """Factory for poll entries from {numplayers: sort_score}."""
    return _build_poll


@pytest.fixture
def make_item() -> Callable[..., CollectionItem]:
    """Factory for collection items with sensible defaults."""
    return _build_item


@pytest.fixture
def sample_collection() -> list[CollectionItem]:
    """A small collection covering expansions, party games and heavy games."""
    return [
        _build_item(
            id=13,
            name="Catan",
            min_players=3,
            max_players=4,
            user_rating=8.0,
            average_rating=7.1,
            average_weight=2.3,
            min_playtime=60,
            max_playtime=120,
            poll=_build_poll({3: 2.0, 4: 3.0, "4+": -1.0}, {"4+": 80.0}),
        ),
        _build_item(
            id=178900,
            name="Codenames",
            min_players=2,
            max_players=8,
            average_rating=7.6,
            average_weight=1.3,
            min_playtime=15,
            max_playtime=15,
            poll=_build_poll({2: -2.0, 4: 2.5, 6: 3.0, 8: 2.0}, {2: 75.0}),
        ),
        _build_item(
            id=12333,
            name="Twilight Struggle",
            min_players=2,
            max_players=2,
            user_rating=9.0,
            average_rating=8.2,
            average_weight=3.6,
            min_playtime=120,
            max_playtime=180,
            poll=_build_poll({1: -3.0, 2: 4.0, 3: -3.0}, {1: 95.0, 3: 90.0}),
        ),
        _build_item(
            id=926,
            name="Catan: Seafarers",
            type="boardgameexpansion",
            min_players=3,
            max_players=4,
            average_rating=7.2,
            average_weight=2.4,
            min_playtime=60,
            max_playtime=120,
        ),
        _build_item(
            id=174430,
            name="Gloomhaven",
            min_players=1,
            max_players=4,
            average_rating=8.6,
            average_weight=3.9,
            min_playtime=60,
            max_playtime=120,
            poll=_build_poll(
                {1: 1.5, 2: 2.5, 3: 2.2, 4: 0.5},
                {1: math.nan, 4: 60.0},
            ),
        ),
    ]
