from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from confapp.clock import to_epoch_millis
from confapp.realtime.socketio import broadcast_event

if TYPE_CHECKING:  # import for type checking only
    from confapp.clock import VirtualClock


def build_time_payload(clock: VirtualClock) -> dict[str, Any]:
    return {
        "now": to_epoch_millis(clock.now()),
        "simulated": clock.is_simulated,
    }


def publish_time_changed(clock: VirtualClock) -> None:
    """Tell every connected client that the demo clock jumped."""

    broadcast_event("time", build_time_payload(clock))
