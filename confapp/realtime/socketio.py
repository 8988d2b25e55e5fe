"""Global Socket.IO server for the mobile client.

Client convention:
- Socket.IO path: /ws/events/
- Auth: `query.token` or `auth.token` (attendee token or operator secret)

Every connection joins the `attendees` broadcast room; attendees also join
their own room and operators join `operators`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from channels.db import database_sync_to_async

from confapp.attendees.authentication import resolve_principal

logger = logging.getLogger(__name__)

BROADCAST_ROOM = "attendees"
OPERATORS_ROOM = "operators"

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
    logger=False,
    engineio_logger=False,
)


@dataclass(frozen=True)
class RealtimeContext:
    attendee_id: int | None
    is_admin: bool


def room_for_attendee(attendee_id: int) -> str:
    return f"attendee_{int(attendee_id)}"


@database_sync_to_async
def _get_context_from_token(token: str) -> RealtimeContext | None:
    principal = resolve_principal(token)
    if principal is None:
        return None
    attendee = principal.attendee
    return RealtimeContext(
        attendee_id=int(attendee.pk) if attendee is not None else None,
        is_admin=principal.is_admin,
    )


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract the bearer token from Socket.IO environ/auth.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner

    query_string: str | bytes = ""
    if isinstance(scope, dict) and "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif isinstance(scope, dict) and "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token

    # Allow `auth: { token }` as fallback.
    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    return None


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    if not token:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    try:
        ctx = await _get_context_from_token(token)
    except Exception as exc:
        logger.exception("Socket.IO connect error")
        msg = "server_error"
        raise ConnectionRefusedError(msg) from exc
    if ctx is None:
        msg = "unauthorized"
        raise ConnectionRefusedError(msg)

    await sio.save_session(
        sid,
        {"attendee_id": ctx.attendee_id, "is_admin": ctx.is_admin},
    )

    await sio.enter_room(sid, BROADCAST_ROOM)
    if ctx.attendee_id is not None:
        await sio.enter_room(sid, room_for_attendee(ctx.attendee_id))
    if ctx.is_admin:
        await sio.enter_room(sid, OPERATORS_ROOM)


@sio.event
async def disconnect(sid: str):
    _ = sid


def emit_event_to_room(room: str, event: str, payload: Any) -> None:
    """Emit an event to a room from sync Django code."""

    async_to_sync(sio.emit)(event, payload, room=room)


def broadcast_event(event: str, payload: Any) -> None:
    emit_event_to_room(BROADCAST_ROOM, event, payload)


def emit_event_to_attendee(attendee_id: int, event: str, payload: Any) -> None:
    emit_event_to_room(room_for_attendee(attendee_id), event, payload)
