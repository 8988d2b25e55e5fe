from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from django.conf import settings
from rest_framework.test import APIClient

from confapp.attendees.models import Attendee
from confapp.clock import from_epoch_millis
from confapp.realtime.events.clock import build_time_payload
from confapp.realtime.events.clock import publish_time_changed
from confapp.realtime.events.votes import publish_votes_changed
from confapp.realtime.socketio import BROADCAST_ROOM
from confapp.realtime.socketio import OPERATORS_ROOM
from confapp.realtime.socketio import RealtimeContext
from confapp.realtime.socketio import _extract_token
from confapp.realtime.socketio import connect
from confapp.realtime.socketio import room_for_attendee
from confapp.realtime.socketio import sio
from confapp.votes.models import Vote


@pytest.mark.parametrize(
    ("environ", "auth", "expected"),
    [
        ({"asgi.scope": {"query_string": b"token=abc&x=1"}}, None, "abc"),
        ({"QUERY_STRING": "token=def"}, None, "def"),
        ({"asgi.scope": {"query_string": b""}}, {"token": "ghi"}, "ghi"),
        ({}, {"token": ""}, None),
        ({}, None, None),
    ],
)
def test_extract_token(environ, auth, expected):
    assert _extract_token(environ, auth) == expected


def test_attendee_room_name():
    assert room_for_attendee(7) == "attendee_7"


def test_time_payload(virtual_clock):
    virtual_clock.set_override(from_epoch_millis(1_000_000))
    assert build_time_payload(virtual_clock) == {"now": 1_000_000, "simulated": True}


def test_publish_time_changed_broadcasts(virtual_clock):
    with mock.patch("confapp.realtime.events.clock.broadcast_event") as broadcast:
        publish_time_changed(virtual_clock)
    broadcast.assert_called_once_with(
        "time",
        {"now": 1_780_308_000_000, "simulated": False},
    )


@pytest.mark.django_db
def test_publish_votes_changed(attendee):
    Vote.objects.create(attendee=attendee, session_id="s1", rating=Vote.Rating.GOOD)
    with mock.patch(
        "confapp.realtime.events.votes.emit_event_to_room"
    ) as to_room, mock.patch(
        "confapp.realtime.events.votes.emit_event_to_attendee"
    ) as to_attendee:
        publish_votes_changed(attendee, "s1")

    to_attendee.assert_called_once_with(
        attendee.pk,
        "votes",
        [{"sessionId": "s1", "rating": 1}],
    )
    room, event, payload = to_room.call_args.args
    assert (room, event) == (OPERATORS_ROOM, "votes_summary")
    assert payload["good"] == 1


@pytest.mark.django_db(transaction=True)
def test_time_override_is_pushed_after_commit():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {settings.CONFAPP_ADMIN_SECRET}")
    with mock.patch(
        "confapp.realtime.socketio.emit_event_to_room"
    ) as emit:
        client.post("/api/v1/time/1000000/")

    room, event, payload = emit.call_args.args
    assert (room, event) == (BROADCAST_ROOM, "time")
    assert payload["simulated"] is True


@pytest.fixture
def socket_server():
    with mock.patch.object(
        sio, "enter_room", new_callable=mock.AsyncMock
    ) as enter_room, mock.patch.object(
        sio, "save_session", new_callable=mock.AsyncMock
    ) as save_session:
        yield enter_room, save_session


def _joined_rooms(enter_room) -> set[str]:
    return {c.args[1] for c in enter_room.await_args_list}


def _environ(token: str = "") -> dict:
    return {"asgi.scope": {"query_string": f"token={token}".encode()}}


def test_connect_without_token_is_refused(socket_server):
    enter_room, _ = socket_server
    with pytest.raises(ConnectionRefusedError):
        async_to_sync(connect)("sid-1", _environ(), None)
    enter_room.assert_not_awaited()


def test_connect_with_unknown_token_is_refused(socket_server):
    enter_room, save_session = socket_server
    with mock.patch(
        "confapp.realtime.socketio._get_context_from_token",
        new=mock.AsyncMock(return_value=None),
    ), pytest.raises(ConnectionRefusedError):
        async_to_sync(connect)("sid-1", _environ("who-is-this"), None)
    enter_room.assert_not_awaited()
    save_session.assert_not_awaited()


def test_attendee_joins_broadcast_and_own_room(socket_server):
    enter_room, save_session = socket_server
    ctx = RealtimeContext(attendee_id=12, is_admin=False)
    with mock.patch(
        "confapp.realtime.socketio._get_context_from_token",
        new=mock.AsyncMock(return_value=ctx),
    ):
        async_to_sync(connect)("sid-2", {}, {"token": "attendee-token"})

    assert _joined_rooms(enter_room) == {BROADCAST_ROOM, "attendee_12"}
    save_session.assert_awaited_once_with(
        "sid-2", {"attendee_id": 12, "is_admin": False}
    )


def test_operator_joins_broadcast_and_operators_room(socket_server):
    enter_room, _ = socket_server
    ctx = RealtimeContext(attendee_id=None, is_admin=True)
    with mock.patch(
        "confapp.realtime.socketio._get_context_from_token",
        new=mock.AsyncMock(return_value=ctx),
    ):
        async_to_sync(connect)("sid-3", _environ("operator-secret"), None)

    assert _joined_rooms(enter_room) == {BROADCAST_ROOM, OPERATORS_ROOM}


@pytest.mark.django_db(transaction=True)
def test_connect_resolves_registered_token(socket_server):
    enter_room, _ = socket_server
    attendee = Attendee.objects.create(token="socket-attendee")  # noqa: S106
    async_to_sync(connect)("sid-4", _environ(attendee.token), None)
    assert _joined_rooms(enter_room) == {
        BROADCAST_ROOM,
        room_for_attendee(attendee.pk),
    }

    with pytest.raises(ConnectionRefusedError):
        async_to_sync(connect)("sid-5", _environ("not-registered"), None)
