from __future__ import annotations

from typing import TYPE_CHECKING

from confapp.realtime.socketio import OPERATORS_ROOM
from confapp.realtime.socketio import emit_event_to_attendee
from confapp.realtime.socketio import emit_event_to_room
from confapp.votes.api.serializers import VoteSerializer
from confapp.votes.services import votes_summary

if TYPE_CHECKING:
    from confapp.attendees.models import Attendee


def publish_votes_changed(attendee: Attendee, session_id: str) -> None:
    """Sync the attendee's other devices and refresh the operator dashboard."""

    votes = VoteSerializer(attendee.votes.all(), many=True).data
    emit_event_to_attendee(attendee.pk, "votes", list(votes))
    emit_event_to_room(OPERATORS_ROOM, "votes_summary", votes_summary(session_id))
