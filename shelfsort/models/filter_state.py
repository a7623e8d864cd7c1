"""
Filter state for one browsing session.

INVARIANTS:
- FilterState is immutable; every transition produces a full replacement
- For every range, min <= max and both lie inside the criterion's domain
  (max may be math.inf for player count and playtime)
"""

import math
from dataclasses import dataclass
from enum import Enum

# (min, max) pair; max may be math.inf for open-ended criteria
RangeValue = tuple[float, float]


class RatingsMode(str, Enum):
    """Which rating is shown on cards and used by the ratings filter."""

    NO_RATING = "NO_RATING"
    AVERAGE_RATING = "AVERAGE_RATING"
    USER_RATING = "USER_RATING"


DEFAULT_PLAYER_COUNT_RANGE: RangeValue = (1, math.inf)
DEFAULT_PLAYTIME_RANGE: RangeValue = (0, math.inf)
DEFAULT_COMPLEXITY_RANGE: RangeValue = (1, 5)
DEFAULT_RATINGS_RANGE: RangeValue = (1, 10)


@dataclass(frozen=True, slots=True)
class FilterState:
    """
    The full set of active criteria values for a session.

    Attributes:
        username: Session identity; empty means no active session
        player_count_range: Party sizes the game must support
        playtime_range: Playtime window in minutes
        complexity_range: Community weight window (1-5)
        ratings_range: Rating window (1-10), applied to the rating picked by ratings_mode
        ratings_mode: Which rating is shown and filtered on
        show_invalid_player_count: Keep poll buckets outside the game's own player range
        show_expansions: Keep expansions in the view
        show_not_recommended: Keep games whose in-range buckets are all not recommended
        is_debug: Log the survivors of every pipeline stage
    """

    username: str = ""
    player_count_range: RangeValue = DEFAULT_PLAYER_COUNT_RANGE
    playtime_range: RangeValue = DEFAULT_PLAYTIME_RANGE
    complexity_range: RangeValue = DEFAULT_COMPLEXITY_RANGE
    ratings_range: RangeValue = DEFAULT_RATINGS_RANGE
    ratings_mode: RatingsMode = RatingsMode.AVERAGE_RATING
    show_invalid_player_count: bool = False
    show_expansions: bool = False
    show_not_recommended: bool = False
    is_debug: bool = False

    @property
    def has_session(self) -> bool:
        return bool(self.username)

    @property
    def is_default_player_count(self) -> bool:
        """True when the player count filter spans the whole domain."""
        return self.player_count_range == DEFAULT_PLAYER_COUNT_RANGE
