"""
Query Parameter Codec — Filter State <-> Shareable URL.

Numeric ranges and booleans are parsed from and serialized to a flat
string key/value store (the page's query string).

INVARIANTS:
- Parsing never raises; malformed or missing values fall back to defaults
- Both range bounds are clamped into the criterion's domain
- Stepped criteria are rounded to their precision; continuous ones are kept exact
- A value equal to its default is omitted from the store entirely
- decode(encode(v)) == normalize(v) for any in-domain v
"""

import math
from collections.abc import Iterator
from decimal import Decimal
from typing import Protocol
from urllib.parse import parse_qsl, urlencode

from shelfsort.models.filter_state import RangeValue

INFINITY_TOKEN = "inf"

# Accepted spellings of a true boolean; a bare key (empty value) also counts
_TRUE_VALUES = frozenset({"", "true", "1", "yes", "on"})
_CANONICAL_TRUE = "true"
_CANONICAL_FALSE = "false"


class ParamStore(Protocol):
    """Flat string key/value store the filter state is persisted to."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class QueryParams:
    """
    In-memory query string store.

    Keeps insertion order so the serialized query string is stable.
    When a key is repeated in the source string, the first value wins.
    """

    def __init__(self, params: dict[str, str] | None = None):
        self._params: dict[str, str] = dict(params or {})

    @classmethod
    def from_query_string(cls, raw: str | None) -> "QueryParams":
        params: dict[str, str] = {}
        for key, value in parse_qsl((raw or "").lstrip("?"), keep_blank_values=True):
            params.setdefault(key, value)
        return cls(params)

    def get(self, key: str) -> str | None:
        return self._params.get(key)

    def set(self, key: str, value: str) -> None:
        self._params[key] = value

    def delete(self, key: str) -> None:
        self._params.pop(key, None)

    def copy(self) -> "QueryParams":
        return QueryParams(self._params)

    def to_dict(self) -> dict[str, str]:
        return dict(self._params)

    def to_query_string(self) -> str:
        return urlencode(self._params)

    def __contains__(self, key: object) -> bool:
        return key in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParams):
            return NotImplemented
        return self._params == other._params

    def __repr__(self) -> str:
        return f"QueryParams({self.to_query_string()!r})"


# =============================================================================
# NUMBERS AND RANGES
# =============================================================================


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]."""
    return max(lo, min(value, hi))


def _parse_number(token: str | None) -> float | None:
    """Parse one range bound. Returns None for anything that is not a number."""
    if token is None:
        return None
    try:
        number = float(token.strip())
    except ValueError:
        return None
    if math.isnan(number):
        return None
    return number


def _round(value: float, decimals: int | None) -> float:
    if decimals is None:
        return value
    return round(value, decimals)


def normalize_range(
    value: tuple[float, float],
    domain_min: float,
    domain_max: float,
    decimals: int | None = 0,
    allow_infinity: bool = False,
) -> RangeValue:
    """
    Bring a range into canonical form.

    - Bounds are rounded to `decimals` places (None keeps them exact) and
      clamped into the domain
    - With `allow_infinity`, a max above the domain becomes math.inf
    - A reversed pair is reordered so min <= max
    """
    low, high = value
    if low > high:
        low, high = high, low

    if allow_infinity and high > domain_max:
        high = math.inf
    else:
        high = clamp(_round(high, decimals), domain_min, domain_max)
    low = clamp(_round(low, decimals), domain_min, domain_max)

    return (low, high)


def parse_range(
    raw: str | None,
    domain_min: float,
    domain_max: float,
    default: RangeValue,
    decimals: int | None = 0,
    allow_infinity: bool = False,
) -> RangeValue:
    """
    Parse "n" or "n-m" into a range.

    A missing or non-numeric bound falls back to the matching default bound.
    """
    if not raw:
        return default

    normalized = raw if "-" in raw else f"{raw}-{raw}"
    min_token, _, max_token = normalized.partition("-")

    parsed_min = _parse_number(min_token)
    parsed_max = _parse_number(max_token)

    low = default[0] if parsed_min is None else parsed_min
    high = default[1] if parsed_max is None else parsed_max

    return normalize_range((low, high), domain_min, domain_max, decimals, allow_infinity)


def format_number(value: float, decimals: int | None = 0) -> str:
    """
    Format a bound without trailing zeros ("7", "7.5", "inf").

    With `decimals=None` the shortest string that parses back to the same
    float is written, in positional notation so it never contains "-".
    """
    if math.isinf(value):
        return INFINITY_TOKEN
    if decimals is None:
        if float(value).is_integer():
            return str(int(value))
        return format(Decimal(repr(float(value))), "f")
    rounded = round(value, decimals)
    if float(rounded).is_integer():
        return str(int(rounded))
    return f"{rounded:.{decimals}f}".rstrip("0").rstrip(".")


def encode_range(value: RangeValue, default: RangeValue, decimals: int | None = 0) -> str | None:
    """
    Serialize a range. Returns None when the key should be omitted.

    Emits "n" when min == max, otherwise "n-m".
    """
    if tuple(value) == tuple(default):
        return None
    low, high = value
    if low == high:
        return format_number(low, decimals)
    return f"{format_number(low, decimals)}-{format_number(high, decimals)}"


# =============================================================================
# BOOLEANS
# =============================================================================


def parse_boolean(raw: str | None) -> bool:
    """A missing key is False; a bare key or a true spelling is True."""
    if raw is None:
        return False
    return raw.strip().lower() in _TRUE_VALUES


def encode_boolean(value: bool, default: bool = False) -> str | None:
    """Serialize a boolean. Returns None when the key should be omitted."""
    if value == default:
        return None
    return _CANONICAL_TRUE if value else _CANONICAL_FALSE


def maybe_set_query_param(store: ParamStore, key: str, encoded: str | None) -> None:
    """Write an encoded value, or remove the key when there is nothing to write."""
    if encoded is None:
        store.delete(key)
    else:
        store.set(key, encoded)
