"""Bearer-token authentication for attendees and conference operators.

Clients send ``Authorization: Bearer <token>``. The token either names a
registered :class:`~confapp.attendees.models.Attendee` or equals the
configured operator secret. Any other token is treated as anonymous so public
endpoints keep working for unregistered installs.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.authentication import get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

from confapp.attendees.models import Attendee

if TYPE_CHECKING:
    from rest_framework.request import Request


@dataclass(frozen=True)
class ConferencePrincipal:
    token: str
    attendee: Attendee | None = None
    is_admin: bool = False

    is_authenticated = True

    @property
    def label(self) -> str:
        if self.is_admin:
            return "admin"
        if self.attendee is not None:
            return f"attendee:{self.attendee.pk}"
        return "anonymous"


def is_admin_secret(token: str) -> bool:
    secret = getattr(settings, "CONFAPP_ADMIN_SECRET", "")
    if not secret or not token:
        return False
    return hmac.compare_digest(token.encode(), str(secret).encode())


def resolve_principal(token: str) -> ConferencePrincipal | None:
    """Map a raw token to a principal, or None when nobody owns it."""
    if is_admin_secret(token):
        return ConferencePrincipal(token=token, is_admin=True)
    attendee = Attendee.objects.filter(token=token).first()
    if attendee is None:
        return None
    return ConferencePrincipal(token=token, attendee=attendee)


class BearerTokenAuthentication(BaseAuthentication):
    keyword = "Bearer"

    def authenticate(self, request: Request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:  # noqa: PLR2004
            msg = "Invalid bearer header."
            raise AuthenticationFailed(msg)
        try:
            token = auth[1].decode()
        except UnicodeError as exc:
            msg = "Invalid bearer token."
            raise AuthenticationFailed(msg) from exc

        principal = resolve_principal(token)
        if principal is None:
            return None
        return (principal, token)

    def authenticate_header(self, request: Request) -> str:
        return self.keyword
