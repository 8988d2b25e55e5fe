from __future__ import annotations

from confapp.live.services import live_info
from confapp.realtime.socketio import broadcast_event


def publish_live_changed() -> None:
    """Push the full room/video list after any live video change."""

    broadcast_event("live", live_info())
