from __future__ import annotations

from confapp.live.models import LiveVideo


def live_info() -> list[dict[str, int | str]]:
    return [
        {"room": room_id, "video": video}
        for room_id, video in LiveVideo.objects.values_list("room_id", "video")
    ]


def set_live_video(room_id: int, video: str | None) -> LiveVideo | None:
    """Show ``video`` in ``room_id``; a blank video takes the room offline."""
    video = (video or "").strip()
    if not video:
        for row in LiveVideo.objects.filter(room_id=room_id):
            row.delete()
        return None
    row, _ = LiveVideo.objects.update_or_create(
        room_id=room_id,
        defaults={"video": video},
    )
    return row
