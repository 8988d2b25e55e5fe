"""Process-wide demo clock.

The clock keeps an optional simulated "now" together with the real time at
which it was installed (the anchor). Reading the clock while an override is
active returns ``override + (real_now - anchor)``: the epoch jumps, the rate
does not.
"""

from __future__ import annotations

import datetime as dt
import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.apps import apps
from django.utils import timezone

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_MIN_AWARE = dt.datetime.min.replace(tzinfo=dt.timezone.utc)
_MAX_AWARE = dt.datetime.max.replace(tzinfo=dt.timezone.utc)

# Overrides keep a century of headroom so the running clock cannot leave the
# datetime range.
OVERRIDE_HEADROOM = dt.timedelta(days=365 * 100)
EARLIEST_OVERRIDE = _MIN_AWARE + OVERRIDE_HEADROOM
LATEST_OVERRIDE = _MAX_AWARE - OVERRIDE_HEADROOM


class OverrideOutOfRangeError(ValueError):
    def __init__(self, value: dt.datetime):
        self.value = value
        super().__init__(
            f"Override {value.isoformat()} outside "
            f"{EARLIEST_OVERRIDE.isoformat()}..{LATEST_OVERRIDE.isoformat()}"
        )


def check_override(value: dt.datetime) -> dt.datetime:
    """Return ``value`` as an aware datetime, or raise OverrideOutOfRangeError."""
    if timezone.is_naive(value):
        value = timezone.make_aware(value, dt.timezone.utc)
    if not EARLIEST_OVERRIDE <= value <= LATEST_OVERRIDE:
        raise OverrideOutOfRangeError(value)
    return value


@dataclass(frozen=True)
class ClockState:
    """Immutable ``(override, anchor)`` pair.

    The pair is always replaced as a whole, so a reader holding one instance
    never mixes an old anchor with a new override.
    """

    override: dt.datetime | None
    anchor: dt.datetime

    @property
    def is_simulated(self) -> bool:
        return self.override is not None


class VirtualClock:
    """Admin-adjustable logical time source.

    ``wall_clock`` supplies real, timezone-aware time and is injectable so
    tests can script it.
    """

    def __init__(self, wall_clock: Callable[[], dt.datetime] | None = None):
        self._wall_clock = wall_clock or timezone.now
        self._write_lock = threading.Lock()
        self._state = ClockState(override=None, anchor=self._wall_clock())

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def is_simulated(self) -> bool:
        return self._state.is_simulated

    def now(self) -> dt.datetime:
        # Single attribute read: the pair below is consistent by construction.
        state = self._state
        real_now = self._wall_clock()
        if state.override is None:
            return real_now
        try:
            return state.override + (real_now - state.anchor)
        except OverflowError:
            # Only reachable after a century of uptime or a wall clock jump.
            if real_now >= state.anchor:
                return _MAX_AWARE
            return _MIN_AWARE

    def set_override(self, value: dt.datetime | None) -> ClockState:
        """Install ``value`` as the simulated now, or clear it with ``None``.

        The anchor is reset on every call, including clears. Raises
        OverrideOutOfRangeError, leaving the clock untouched, for values too
        close to the ends of the datetime range.
        """
        if value is not None:
            value = check_override(value)
        with self._write_lock:
            state = ClockState(override=value, anchor=self._wall_clock())
            self._state = state
        if value is None:
            logger.info("Demo clock override cleared")
        else:
            logger.info("Demo clock override set to %s", value.isoformat())
        return state

    def clear_override(self) -> ClockState:
        return self.set_override(None)


def get_clock() -> VirtualClock:
    """Return the clock owned by the ``clock`` app of this process."""
    return apps.get_app_config("clock").clock


def to_epoch_millis(value: dt.datetime) -> int:
    delta = value - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_millis(millis: int) -> dt.datetime:
    return _EPOCH + dt.timedelta(milliseconds=int(millis))
