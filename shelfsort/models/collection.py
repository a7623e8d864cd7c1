"""
Board game collection models.

A `CollectionItem` is one entry of a previously-fetched collection, as
delivered by the catalog fetch. Items are immutable; the filtering
pipeline produces `AnnotatedItem` copies and never touches the source.
"""

import math
import re
from dataclasses import dataclass

# Item type for base games; anything else (e.g. "boardgameexpansion") is an expansion
BOARD_GAME_TYPE = "boardgame"

# Displayed in place of a user rating the user never entered
RATING_NOT_AVAILABLE = "N/A"


def parse_player_count_label(label: int | str) -> int:
    """
    Map a poll bucket label to a comparable player count.

    Integer labels map to themselves. Open-ended labels like "4+" map to
    one more than their number (5), so "4+" sorts after the "4" bucket.
    Returns 0 for labels without a leading number.
    """
    if isinstance(label, int):
        return label
    text = label.strip()
    if text.isdigit():
        return int(text)
    match = re.match(r"^(\d+)\s*\+", text)
    if match:
        return int(match.group(1)) + 1
    match = re.match(r"^(\d+)", text)
    if match:
        return int(match.group(1))
    return 0


@dataclass(frozen=True, slots=True)
class PollEntry:
    """
    One player-count recommendation record from the community poll.

    Attributes:
        numplayers: Poll bucket label (3, or "4+" for the open-ended bucket)
        player_count_value: Comparable player count for the bucket
        sort_score: Recommendation strength used for score sorting
        not_recommended_percent: Share of "not recommended" votes, NaN when unknown
        best_percent: Share of "best" votes (chart data)
        recommended_percent: Share of "recommended" votes (chart data)
    """

    numplayers: int | str
    player_count_value: int
    sort_score: float = 0.0
    not_recommended_percent: float = math.nan
    best_percent: float = 0.0
    recommended_percent: float = 0.0

    @classmethod
    def from_label(
        cls,
        numplayers: int | str,
        sort_score: float = 0.0,
        not_recommended_percent: float | None = None,
        best_percent: float = 0.0,
        recommended_percent: float = 0.0,
    ) -> "PollEntry":
        """Build an entry, deriving `player_count_value` from the label."""
        return cls(
            numplayers=numplayers,
            player_count_value=parse_player_count_label(numplayers),
            sort_score=sort_score,
            not_recommended_percent=(
                math.nan if not_recommended_percent is None else not_recommended_percent
            ),
            best_percent=best_percent,
            recommended_percent=recommended_percent,
        )


@dataclass(frozen=True, slots=True)
class AnnotatedPollEntry(PollEntry):
    """A poll entry marked with membership in the active player count range."""

    is_player_count_within_range: bool = False


@dataclass(frozen=True, slots=True)
class CollectionItem:
    """
    A game in the user's collection.

    `user_rating` is "N/A" when the user never rated the game.
    """

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
    poll: tuple[PollEntry, ...] = ()
    thumbnail: str | None = None

    @property
    def is_expansion(self) -> bool:
        return self.type != BOARD_GAME_TYPE


@dataclass(frozen=True, slots=True)
class AnnotatedItem(CollectionItem):
    """
    A collection item as produced by the pipeline.

    Every poll entry is an `AnnotatedPollEntry`.
    """

    poll: tuple[AnnotatedPollEntry, ...] = ()
