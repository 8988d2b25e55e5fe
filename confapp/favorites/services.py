from __future__ import annotations

from typing import TYPE_CHECKING

from confapp.favorites.models import Favorite

if TYPE_CHECKING:
    from confapp.attendees.models import Attendee


def favorite_session_ids(attendee: Attendee) -> list[str]:
    return list(
        Favorite.objects.filter(attendee=attendee).values_list("session_id", flat=True)
    )


def add_favorite(attendee: Attendee, session_id: str) -> bool:
    """Mark a session as favorite; returns False when it already was."""
    _, created = Favorite.objects.get_or_create(
        attendee=attendee,
        session_id=session_id,
    )
    return created


def remove_favorite(attendee: Attendee, session_id: str) -> bool:
    deleted, _ = Favorite.objects.filter(
        attendee=attendee, session_id=session_id
    ).delete()
    return bool(deleted)
