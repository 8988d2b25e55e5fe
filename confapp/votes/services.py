"""Vote submission gated by the demo clock."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.db.models import Count
from django.db.models import Q

from confapp.clock import GateDecision
from confapp.clock import evaluate
from confapp.clock import get_clock
from confapp.schedule.services import find_session
from confapp.votes.models import Vote

if TYPE_CHECKING:
    import datetime as dt

    from confapp.attendees.models import Attendee
    from confapp.clock import VirtualClock
    from confapp.schedule.services import ScheduledSession

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Unknown session: {session_id}")


class VoteOutcome(enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    TOO_EARLY = "too_early"


@dataclass(frozen=True)
class VoteResult:
    outcome: VoteOutcome
    session: ScheduledSession
    now: dt.datetime


def submit_vote(
    attendee: Attendee,
    session_id: str,
    rating: int,
    *,
    clock: VirtualClock | None = None,
) -> VoteResult:
    """Store ``rating`` unless the session has not started on the demo clock.

    Raises SessionNotFoundError for ids missing from the current schedule.
    """
    session = find_session(session_id)
    if session is None:
        raise SessionNotFoundError(session_id)

    now = (clock or get_clock()).now()
    if evaluate(session, now) is GateDecision.TOO_EARLY:
        logger.info(
            "Vote for session %s refused: starts at %s, clock reads %s",
            session.id,
            session.starts_at.isoformat() if session.starts_at else "unknown",
            now.isoformat(),
        )
        return VoteResult(VoteOutcome.TOO_EARLY, session, now)

    _, created = Vote.objects.update_or_create(
        attendee=attendee,
        session_id=session.id,
        defaults={"rating": int(rating)},
    )
    outcome = VoteOutcome.CREATED if created else VoteOutcome.UPDATED
    return VoteResult(outcome, session, now)


def delete_vote(attendee: Attendee, session_id: str) -> bool:
    deleted, _ = Vote.objects.filter(attendee=attendee, session_id=session_id).delete()
    return bool(deleted)


def votes_summary(session_id: str) -> dict[str, int | str]:
    counts = Vote.objects.filter(session_id=session_id).aggregate(
        good=Count("id", filter=Q(rating=Vote.Rating.GOOD)),
        ok=Count("id", filter=Q(rating=Vote.Rating.OK)),
        bad=Count("id", filter=Q(rating=Vote.Rating.BAD)),
        total=Count("id"),
    )
    return {"sessionId": session_id, **counts}
