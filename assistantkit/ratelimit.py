"""Rate-limit information carried in API response headers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_UNIT_PATTERN = r"(?:ns|us|µs|μs|ms|s|m|h)"
_NUMBER_PATTERN = r"(?:\d+(?:\.\d*)?|\.\d+)"
_DURATION = re.compile(rf"([-+]?)((?:{_NUMBER_PATTERN}{_UNIT_PATTERN})+|0)")
_COMPONENT = re.compile(rf"({_NUMBER_PATTERN})({_UNIT_PATTERN})")
_INTEGER = re.compile(r"[-+]?\d+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h2m3.5s"`` or ``"20ms"``.

    Raises ``ValueError`` when the text is not a valid duration.
    """
    match = _DURATION.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid duration {text!r}")
    sign, body = match.groups()
    if body == "0":
        return timedelta(0)
    nanoseconds = sum(
        (Decimal(number) * _UNIT_NANOSECONDS[unit] for number, unit in _COMPONENT.findall(body)),
        Decimal(0),
    )
    delta = timedelta(microseconds=round(nanoseconds / 1000))
    return -delta if sign == "-" else delta


class ResetTime(str):
    """A reset interval as reported by the server, e.g. ``"6m0s"``."""

    def time(self) -> datetime:
        """Return the local time at which the limit resets.

        An interval that cannot be parsed counts as zero.
        """
        try:
            delta = parse_duration(self)
        except ValueError:
            delta = timedelta(0)
        return datetime.now() + delta


@dataclass(frozen=True)
class RateLimitHeaders:
    """The ``x-ratelimit-*`` values of a response."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = field(default_factory=lambda: ResetTime(""))
    reset_tokens: ResetTime = field(default_factory=lambda: ResetTime(""))


def _to_int(value: str) -> int:
    return int(value) if _INTEGER.fullmatch(value) else 0


def parse_rate_limit_headers(headers: Mapping[str, Any] | Any) -> RateLimitHeaders:
    """Read rate-limit values from response headers; missing or bad numbers become 0."""
    lowered = {str(key).lower(): str(value) for key, value in headers.items()}

    def get(name: str) -> str:
        return lowered.get(name, "")

    return RateLimitHeaders(
        limit_requests=_to_int(get("x-ratelimit-limit-requests")),
        limit_tokens=_to_int(get("x-ratelimit-limit-tokens")),
        remaining_requests=_to_int(get("x-ratelimit-remaining-requests")),
        remaining_tokens=_to_int(get("x-ratelimit-remaining-tokens")),
        reset_requests=ResetTime(get("x-ratelimit-reset-requests")),
        reset_tokens=ResetTime(get("x-ratelimit-reset-tokens")),
    )