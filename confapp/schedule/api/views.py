import logging

from drf_spectacular.utils import OpenApiResponse
from drf_spectacular.utils import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.attendees.permissions import HasAdminSecret
from confapp.audit.utils import get_remote_ip
from confapp.audit.utils import log_action
from confapp.favorites.services import favorite_session_ids
from confapp.live.services import live_info
from confapp.schedule.services import ScheduleSyncError
from confapp.schedule.services import current_document
from confapp.schedule.services import synchronize_with_sessionize
from confapp.votes.api.serializers import VoteSerializer
from confapp.votes.models import Vote

logger = logging.getLogger(__name__)


class ConferenceDataView(APIView):
    """Everything the app needs on launch in one call.

    Anonymous callers get the schedule and live videos; registered attendees
    additionally get their favorites and votes.
    """

    @extend_schema(tags=["Conference"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        attendee = getattr(request.user, "attendee", None)
        favorites: list[str] = []
        votes: list = []
        if attendee is not None:
            favorites = favorite_session_ids(attendee)
            votes = VoteSerializer(
                Vote.objects.filter(attendee=attendee), many=True
            ).data
        return Response(
            {
                "allData": current_document(),
                "favorites": favorites,
                "votes": votes,
                "liveVideos": live_info(),
            }
        )


class SessionizeSyncView(APIView):
    permission_classes = [HasAdminSecret]

    @extend_schema(
        tags=["Conference"],
        request=None,
        responses={
            200: OpenApiTypes.OBJECT,
            502: OpenApiResponse(description="Schedule source unavailable"),
        },
    )
    def post(self, request):
        try:
            snapshot = synchronize_with_sessionize()
        except ScheduleSyncError as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_502_BAD_GATEWAY,
            )
        sessions = len(snapshot.document.get("sessions", []))
        log_action(
            "schedule_synchronized",
            actor=request.user,
            message=f"source={snapshot.source_url} sessions={sessions}",
            ip_address=get_remote_ip(request),
        )
        return Response({"snapshot": snapshot.pk, "sessions": sessions})
