"""
Auction Expiry - Duration configuration and the expiry predicate.

An ACTIVE auction expires once `now - timestamp >= duration`. The boundary
is inclusive and measured in whole epoch seconds. Both store backends
compare against the same cutoff (`expiry_cutoff`), so the in-memory scan
and the SQL bulk update close exactly the same set of auctions.

The duration comes from a string setting written in Go duration syntax
("10m", "1h30m", "90s"). A missing or malformed setting never fails: the
resolver falls back to DEFAULT_AUCTION_DURATION and logs a warning.
"""

import math
import re
import threading
from datetime import timedelta
from typing import Optional

from auctioneer.core.auction.entity import AuctionStatus
from auctioneer.utils.logger import get_logger

logger = get_logger("expiry")


# =============================================================================
# Constants
# =============================================================================

DEFAULT_AUCTION_DURATION = timedelta(minutes=10)

# Seconds per unit
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,  # U+00B5 micro sign
    "μs": 1e-6,  # U+03BC greek mu
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

# Longer units first so "ms" wins over "m"
_COMPONENT_RE = re.compile(r"([0-9]*(?:\.[0-9]*)?)(ns|us|µs|μs|ms|s|m|h)")

# Largest duration representable as int64 nanoseconds (about 292 years)
MAX_DURATION_SECONDS = (2**63 - 1) / 1e9


# =============================================================================
# Duration Parsing
# =============================================================================


def parse_duration(text: str) -> timedelta:
    """
    Parse a Go-style duration string.

    Accepts an optional sign followed by one or more `<number><unit>`
    groups, e.g. "300ms", "-1.5h", "2h45m". The bare string "0" is zero.

    Args:
        text: Duration string

    Returns:
        Parsed duration

    Raises:
        ValueError: If the string is not a valid duration or exceeds
            MAX_DURATION_SECONDS
    """
    original = text
    sign = 1.0

    if text[:1] in ("-", "+"):
        if text[0] == "-":
            sign = -1.0
        text = text[1:]

    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"Invalid duration: {original!r}")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _COMPONENT_RE.match(text, pos)
        if match is None:
            raise ValueError(f"Invalid duration: {original!r}")

        number, unit = match.groups()
        if not any(ch.isdigit() for ch in number):
            raise ValueError(f"Invalid duration: {original!r}")

        total += float(number) * _UNIT_SECONDS[unit]
        if total > MAX_DURATION_SECONDS:
            raise ValueError(f"Invalid duration: {original!r} is out of range")
        pos = match.end()

    return timedelta(seconds=sign * total)


def duration_seconds(duration: timedelta) -> int:
    """
    Whole seconds an auction must have run to count as expired.

    Timestamps are whole seconds, so a fractional duration rounds up:
    `age >= 1.5s` holds for integer ages exactly when `age >= 2`.
    """
    return math.ceil(duration.total_seconds())


# =============================================================================
# Expiry Predicate
# =============================================================================


def expiry_cutoff(now: int, duration: timedelta) -> int:
    """Latest start timestamp that counts as expired at `now`."""
    return now - duration_seconds(duration)


def is_expired(
    status: AuctionStatus,
    timestamp: int,
    now: int,
    duration: timedelta,
) -> bool:
    """
    Decide whether an auction is eligible for closure.

    COMPLETED auctions are never eligible, however old they are.

    Args:
        status: Current auction status
        timestamp: Auction start (epoch seconds)
        now: Current time (epoch seconds)
        duration: Configured auction duration

    Returns:
        True iff status is ACTIVE and now - timestamp >= duration
    """
    if status != AuctionStatus.ACTIVE:
        return False
    return timestamp <= expiry_cutoff(now, duration)


# =============================================================================
# Duration Resolver
# =============================================================================


class DurationResolver:
    """
    Resolves the configured auction duration.

    The raw setting is handed in at construction; the result is computed
    once and cached since the setting cannot change afterwards.
    """

    def __init__(
        self,
        setting: Optional[str] = None,
        default: timedelta = DEFAULT_AUCTION_DURATION,
    ):
        """
        Args:
            setting: Raw duration string (e.g. "10m"), or None if unset
            default: Duration used when the setting is missing or invalid
        """
        self.setting = setting
        self.default = default
        self._resolved: Optional[timedelta] = None
        self._lock = threading.Lock()

    def resolve(self) -> timedelta:
        """Return the configured duration, or the default. Never raises."""
        with self._lock:
            if self._resolved is None:
                self._resolved = self._parse_setting()
            return self._resolved

    @property
    def is_fallback(self) -> bool:
        """True if resolve() returns the default instead of the setting."""
        return self.resolve() is self.default

    def _parse_setting(self) -> timedelta:
        if self.setting is None or not self.setting.strip():
            logger.warning(
                f"Auction duration not configured, using default {self.default}"
            )
            return self.default

        try:
            return parse_duration(self.setting.strip())
        except ValueError:
            logger.warning(
                f"Invalid auction duration {self.setting!r}, using default {self.default}"
            )
            return self.default
