import datetime as dt

import pytest

from confapp.attendees.models import Attendee
from confapp.votes.models import Vote
from confapp.votes.services import SessionNotFoundError
from confapp.votes.services import VoteOutcome
from confapp.votes.services import delete_vote
from confapp.votes.services import submit_vote
from confapp.votes.services import votes_summary
from conftest import SESSION_START

pytestmark = pytest.mark.django_db


def test_first_vote_is_created_then_revised(attendee, schedule, virtual_clock):
    first = submit_vote(attendee, "started", Vote.Rating.GOOD, clock=virtual_clock)
    assert first.outcome is VoteOutcome.CREATED
    assert first.now == SESSION_START

    second = submit_vote(attendee, "started", Vote.Rating.BAD, clock=virtual_clock)
    assert second.outcome is VoteOutcome.UPDATED
    vote = Vote.objects.get(attendee=attendee, session_id="started")
    assert vote.rating == Vote.Rating.BAD


def test_vote_before_start_is_refused_without_storing(
    attendee,
    schedule,
    virtual_clock,
):
    result = submit_vote(attendee, "upcoming", Vote.Rating.OK, clock=virtual_clock)
    assert result.outcome is VoteOutcome.TOO_EARLY
    assert result.session.starts_at == SESSION_START + dt.timedelta(hours=1)
    assert not Vote.objects.filter(session_id="upcoming").exists()


def test_moving_the_clock_opens_voting(attendee, schedule, virtual_clock):
    virtual_clock.set_override(SESSION_START + dt.timedelta(hours=1))
    result = submit_vote(attendee, "upcoming", Vote.Rating.GOOD, clock=virtual_clock)
    assert result.outcome is VoteOutcome.CREATED


def test_rewinding_the_clock_closes_voting_again(attendee, schedule, virtual_clock):
    virtual_clock.set_override(SESSION_START - dt.timedelta(hours=2))
    result = submit_vote(attendee, "started", Vote.Rating.GOOD, clock=virtual_clock)
    assert result.outcome is VoteOutcome.TOO_EARLY


def test_session_without_start_time_never_accepts_votes(
    attendee,
    schedule,
    virtual_clock,
):
    virtual_clock.set_override(SESSION_START + dt.timedelta(days=3650))
    result = submit_vote(attendee, "unscheduled", Vote.Rating.OK, clock=virtual_clock)
    assert result.outcome is VoteOutcome.TOO_EARLY


def test_unknown_session_raises(attendee, schedule, virtual_clock):
    with pytest.raises(SessionNotFoundError):
        submit_vote(attendee, "nope", Vote.Rating.OK, clock=virtual_clock)


def test_summary_and_delete(attendee, schedule, virtual_clock):
    other = Attendee.objects.create(token="attendee-token-2")  # noqa: S106
    submit_vote(attendee, "started", Vote.Rating.GOOD, clock=virtual_clock)
    submit_vote(other, "started", Vote.Rating.BAD, clock=virtual_clock)

    assert votes_summary("started") == {
        "sessionId": "started",
        "good": 1,
        "ok": 0,
        "bad": 1,
        "total": 2,
    }
    assert delete_vote(attendee, "started") is True
    assert delete_vote(attendee, "started") is False
    assert votes_summary("started")["total"] == 1
