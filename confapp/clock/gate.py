"""Vote gate: ratings open once a session has started on the demo clock."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING
from typing import Protocol

if TYPE_CHECKING:
    import datetime as dt


class HasStartTime(Protocol):
    starts_at: dt.datetime | None


class GateDecision(enum.Enum):
    OPEN = "open"
    TOO_EARLY = "too_early"


def evaluate(session: HasStartTime, now: dt.datetime) -> GateDecision:
    """Decide whether ratings for ``session`` are accepted at ``now``.

    - Opens at ``starts_at`` inclusive and never closes again.
    - A session without a known start time stays closed.
    """
    starts_at = getattr(session, "starts_at", None)
    if starts_at is None:
        return GateDecision.TOO_EARLY
    if now >= starts_at:
        return GateDecision.OPEN
    return GateDecision.TOO_EARLY


def is_open(session: HasStartTime, now: dt.datetime) -> bool:
    return evaluate(session, now) is GateDecision.OPEN
