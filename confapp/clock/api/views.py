import logging

from django.db import transaction
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.attendees.permissions import HasAdminSecret
from confapp.audit.utils import get_remote_ip
from confapp.audit.utils import log_action
from confapp.clock.service import EARLIEST_OVERRIDE
from confapp.clock.service import LATEST_OVERRIDE
from confapp.clock.service import OverrideOutOfRangeError
from confapp.clock.service import check_override
from confapp.clock.service import from_epoch_millis
from confapp.clock.service import get_clock
from confapp.clock.service import to_epoch_millis
from confapp.realtime.events.clock import publish_time_changed

logger = logging.getLogger(__name__)

# Path literal that cancels the simulation.
CLEAR_OVERRIDE_TOKEN = "null"


def parse_override(raw: str):
    """Return None for the clear token, else the datetime for epoch millis."""
    value = (raw or "").strip()
    if value.lower() == CLEAR_OVERRIDE_TOKEN:
        return None
    try:
        millis = int(value)
    except ValueError as exc:
        msg = f"Use '{CLEAR_OVERRIDE_TOKEN}' or epoch milliseconds."
        raise ValidationError({"timestamp": msg}) from exc
    try:
        return check_override(from_epoch_millis(millis))
    except (OverflowError, OverrideOutOfRangeError) as exc:
        msg = (
            f"Timestamp out of range; use {to_epoch_millis(EARLIEST_OVERRIDE)}"
            f"..{to_epoch_millis(LATEST_OVERRIDE)}."
        )
        raise ValidationError({"timestamp": msg}) from exc


class ClockViewMixin:
    # Injectable for tests; None means the process clock.
    clock = None

    def get_clock(self):
        return self.clock or get_clock()


class TimeView(ClockViewMixin, APIView):
    authentication_classes = []

    @extend_schema(
        tags=["Time"],
        responses={200: OpenApiTypes.INT},
        description="Current demo-clock time in epoch milliseconds.",
    )
    def get(self, request):
        return Response(to_epoch_millis(self.get_clock().now()))


class TimeOverrideView(ClockViewMixin, APIView):
    permission_classes = [HasAdminSecret]

    @extend_schema(
        tags=["Time"],
        request=None,
        responses={200: OpenApiTypes.INT},
        parameters=[
            OpenApiParameter(
                name="timestamp",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.PATH,
                description="Epoch milliseconds, or 'null' to return to real time",
            ),
        ],
    )
    def post(self, request, timestamp: str):
        override = parse_override(timestamp)
        clock = self.get_clock()
        previous = clock.state
        state = clock.set_override(override)

        log_action(
            "clock_override_cleared" if override is None else "clock_override_set",
            actor=request.user,
            message=f"timestamp={timestamp}",
            before=_state_payload(previous),
            after=_state_payload(state),
            ip_address=get_remote_ip(request),
        )
        transaction.on_commit(lambda: publish_time_changed(clock))
        return Response(to_epoch_millis(clock.now()), status=status.HTTP_200_OK)


def _state_payload(state) -> dict:
    return {
        "override": to_epoch_millis(state.override) if state.override else None,
        "anchor": to_epoch_millis(state.anchor),
    }
