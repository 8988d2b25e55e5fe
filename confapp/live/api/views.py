from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.attendees.permissions import HasAdminSecret
from confapp.audit.utils import get_remote_ip
from confapp.audit.utils import log_action
from confapp.live.api.serializers import LiveVideoSerializer
from confapp.live.api.serializers import LiveVideoUpdateSerializer
from confapp.live.services import live_info
from confapp.live.services import set_live_video


class LiveVideosView(APIView):
    """Per-room live streams.

    - GET: public list of rooms currently streaming
    - POST: operator sets (or clears with an empty ``video``) a room stream
    """

    def get_permissions(self):
        if self.request.method == "POST":
            return [HasAdminSecret()]
        return [AllowAny()]

    @extend_schema(tags=["Live"], responses=LiveVideoSerializer(many=True))
    def get(self, request):
        return Response(live_info())

    @extend_schema(tags=["Live"], request=LiveVideoUpdateSerializer, responses=None)
    def post(self, request):
        serializer = LiveVideoUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room_id = serializer.validated_data["roomId"]
        video = serializer.validated_data.get("video")

        row = set_live_video(room_id, video)
        log_action(
            "live_video_updated" if row else "live_video_cleared",
            actor=request.user,
            message=f"room={room_id}",
            after={"room": room_id, "video": row.video if row else None},
            ip_address=get_remote_ip(request),
        )
        return Response(status=status.HTTP_200_OK)
