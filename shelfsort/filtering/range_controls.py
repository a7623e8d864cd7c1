"""
Range Criterion Controls — Player Count, Playtime, Complexity, Ratings.

Each control owns one `RangeValue` field of FilterState and knows how to:
- decode its initial value from the query string
- apply a new range (pure, re-clamped)
- describe its slider (domain, step, marks, labels)
- decide whether a collection item falls inside the active range
- encode its value back into the query string

Shared clamp/codec/compare logic lives in `RangeControl`; subclasses only
choose the compared item field and, for ratings, the label text.

INVARIANTS:
- get_reduced_state() replaces only the control's own field
- Membership is interval overlap; single-valued fields are degenerate intervals
- Non-numeric ratings count as the domain minimum
"""

import dataclasses
import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from shelfsort.filtering.query_params import (
    ParamStore,
    encode_range,
    format_number,
    maybe_set_query_param,
    normalize_range,
    parse_range,
)
from shelfsort.models.collection import CollectionItem
from shelfsort.models.filter_state import (
    DEFAULT_COMPLEXITY_RANGE,
    DEFAULT_PLAYER_COUNT_RANGE,
    DEFAULT_PLAYTIME_RANGE,
    DEFAULT_RATINGS_RANGE,
    FilterState,
    RangeValue,
    RatingsMode,
)

ItemPredicate = Callable[[CollectionItem], bool]


@dataclass(frozen=True, slots=True)
class SliderMark:
    value: float
    label: str


@dataclass(frozen=True, slots=True)
class SliderConfig:
    """
    Everything a slider widget needs to render one range control.

    `value` is the active range in slider units: an infinite max is shown
    at the overflow tick (`max`).
    """

    query_key: str
    label: str
    min_aria_label: str
    max_aria_label: str
    min: float
    max: float
    step: float | None
    marks: tuple[SliderMark, ...]
    value: tuple[float, float]
    value_labels: tuple[str, str]


def ranges_overlap(item_range: tuple[float, float], filter_range: RangeValue) -> bool:
    """True if the two inclusive intervals share at least one point."""
    item_min, item_max = item_range
    filter_min, filter_max = filter_range
    return item_min <= filter_max and filter_min <= item_max


class RangeControl(ABC):
    """
    Generic range control parametrized by domain bounds and step.

    Attributes:
        state_field: FilterState attribute holding the range
        query_key: Query string key
        subject: Human label of the criterion ("Player Count")
        domain_min / domain_max: Inclusive domain
        default: Range that is omitted from the query string
        step: Slider step, None for continuous
        decimals: Precision kept in state and in the query string; None for
            continuous criteria, whose values are kept exact
        allow_infinity: Whether max may be math.inf
        overflow_step: Distance of the "N+" slider tick past domain_max
    """

    def __init__(
        self,
        state_field: str,
        query_key: str,
        subject: str,
        domain_min: float,
        domain_max: float,
        default: RangeValue,
        step: float | None = None,
        decimals: int | None = 0,
        allow_infinity: bool = False,
        overflow_step: float = 0,
    ):
        self.state_field = state_field
        self.query_key = query_key
        self.subject = subject
        self.domain_min = domain_min
        self.domain_max = domain_max
        self.default = default
        self.step = step
        self.decimals = decimals
        self.allow_infinity = allow_infinity
        self.overflow_step = overflow_step if allow_infinity else 0

    @property
    def slider_max(self) -> float:
        return self.domain_max + self.overflow_step

    def get_value(self, state: FilterState) -> RangeValue:
        value: RangeValue = getattr(state, self.state_field)
        return value

    def normalize(self, value: tuple[float, float]) -> RangeValue:
        return normalize_range(
            value,
            self.domain_min,
            self.domain_max,
            decimals=self.decimals,
            allow_infinity=self.allow_infinity,
        )

    def get_initial_state(self, store: ParamStore) -> RangeValue:
        return parse_range(
            store.get(self.query_key),
            self.domain_min,
            self.domain_max,
            self.default,
            decimals=self.decimals,
            allow_infinity=self.allow_infinity,
        )

    def get_reduced_state(self, state: FilterState, new_range: tuple[float, float]) -> FilterState:
        """Return `state` with only this control's range replaced."""
        return dataclasses.replace(state, **{self.state_field: self.normalize(new_range)})

    def set_query_param(self, store: ParamStore, state: FilterState) -> None:
        encoded = encode_range(self.get_value(state), self.default, self.decimals)
        maybe_set_query_param(store, self.query_key, encoded)

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    def get_subject(self, state: FilterState) -> str:  # noqa: ARG002
        return self.subject

    def get_label(self, state: FilterState) -> str:
        return f"Filter by {self.get_subject(state)}"

    def value_label(self, value: float) -> str:
        if value > self.domain_max:
            return f"{format_number(self.domain_max)}+"
        return format_number(value, self.decimals)

    def marks(self) -> tuple[SliderMark, ...]:
        return tuple(SliderMark(value=v, label=self.value_label(v)) for v in self._mark_values())

    @abstractmethod
    def _mark_values(self) -> list[float]: ...

    def get_presentation_config(self, state: FilterState) -> SliderConfig:
        low, high = self.get_value(state)
        slider_high = self.slider_max if math.isinf(high) else high
        subject = self.get_subject(state)
        return SliderConfig(
            query_key=self.query_key,
            label=self.get_label(state),
            min_aria_label=f"Minimum {subject}",
            max_aria_label=f"Maximum {subject}",
            min=self.domain_min,
            max=self.slider_max,
            step=self.step,
            marks=self.marks(),
            value=(low, slider_high),
            value_labels=(self.value_label(low), self.value_label(slider_high)),
        )

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    @abstractmethod
    def item_range(self, state: FilterState, item: CollectionItem) -> tuple[float, float]:
        """The item's own interval for this criterion."""

    def is_within_range(self, state: FilterState) -> ItemPredicate:
        filter_range = self.get_value(state)

        def predicate(item: CollectionItem) -> bool:
            return ranges_overlap(self.item_range(state, item), filter_range)

        return predicate


class PlayerCountControl(RangeControl):
    """
    Party sizes. Matches when the game's [min_players, max_players]
    intersects the filter, since a game supports a range of party sizes.
    """

    def __init__(self) -> None:
        super().__init__(
            state_field="player_count_range",
            query_key="playerCount",
            subject="Player Count",
            domain_min=1,
            domain_max=10,
            default=DEFAULT_PLAYER_COUNT_RANGE,
            step=1,
            allow_infinity=True,
            overflow_step=1,
        )

    def _mark_values(self) -> list[float]:
        return list(range(1, int(self.slider_max) + 1))

    def item_range(self, state: FilterState, item: CollectionItem) -> tuple[float, float]:
        return (item.min_players, item.max_players)


class PlaytimeControl(RangeControl):
    """Playtime in minutes; matches when the game's playtime window intersects."""

    def __init__(self) -> None:
        super().__init__(
            state_field="playtime_range",
            query_key="playtime",
            subject="Playtime",
            domain_min=0,
            domain_max=240,
            default=DEFAULT_PLAYTIME_RANGE,
            decimals=None,
            allow_infinity=True,
            overflow_step=15,
        )

    def _mark_values(self) -> list[float]:
        return [*range(0, int(self.domain_max) + 1, 30), self.slider_max]

    def item_range(self, state: FilterState, item: CollectionItem) -> tuple[float, float]:
        return (item.min_playtime, item.max_playtime)


class ComplexityControl(RangeControl):
    def __init__(self) -> None:
        super().__init__(
            state_field="complexity_range",
            query_key="complexity",
            subject="Complexity",
            domain_min=1,
            domain_max=5,
            default=DEFAULT_COMPLEXITY_RANGE,
            decimals=None,
        )

    def _mark_values(self) -> list[float]:
        return [1, 2, 3, 4, 5]

    def item_range(self, state: FilterState, item: CollectionItem) -> tuple[float, float]:
        return (item.average_weight, item.average_weight)


class RatingsControl(RangeControl):
    """
    Ratings on a 1-10 scale.

    Filters on the user rating when ratings_mode is USER_RATING, otherwise
    on the average rating. An unrated game counts as the domain minimum.
    """

    def __init__(self) -> None:
        super().__init__(
            state_field="ratings_range",
            query_key="ratings",
            subject="Ratings",
            domain_min=1,
            domain_max=10,
            default=DEFAULT_RATINGS_RANGE,
            step=0.1,
            decimals=1,
        )

    def get_subject(self, state: FilterState) -> str:
        if state.ratings_mode == RatingsMode.USER_RATING:
            return "User Ratings"
        return "Average Ratings"

    def value_label(self, value: float) -> str:
        return format_number(value, self.decimals)

    def _mark_values(self) -> list[float]:
        # Every step gets a tick; only whole numbers get a label
        return [index / 10 for index in range(10, 101)]

    def marks(self) -> tuple[SliderMark, ...]:
        return tuple(
            SliderMark(value=v, label=format_number(v) if float(v).is_integer() else "")
            for v in self._mark_values()
        )

    def item_range(self, state: FilterState, item: CollectionItem) -> tuple[float, float]:
        raw = item.user_rating if state.ratings_mode == RatingsMode.USER_RATING else item.average_rating
        rating = raw if isinstance(raw, int | float) and not isinstance(raw, bool) else self.domain_min
        if isinstance(rating, float) and math.isnan(rating):
            rating = self.domain_min
        return (rating, rating)


player_count_control = PlayerCountControl()
playtime_control = PlaytimeControl()
complexity_control = ComplexityControl()
ratings_control = RatingsControl()

# Pipeline order: player count, playtime, complexity, ratings
RANGE_CONTROLS: tuple[RangeControl, ...] = (
    player_count_control,
    playtime_control,
    complexity_control,
    ratings_control,
)
