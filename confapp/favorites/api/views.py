from drf_spectacular.utils import OpenApiTypes
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.attendees.parsers import read_scalar
from confapp.attendees.permissions import IsRegisteredAttendee
from confapp.favorites.services import add_favorite
from confapp.favorites.services import favorite_session_ids
from confapp.favorites.services import remove_favorite

SESSION_ID_MAX_LENGTH = 64


def _session_id_from_request(request) -> str:
    session_id = read_scalar(request.data, "sessionId", "session_id")
    if not session_id:
        raise ValidationError({"sessionId": "This field is required."})
    if len(session_id) > SESSION_ID_MAX_LENGTH:
        raise ValidationError({"sessionId": "Unknown session id format."})
    return session_id


@extend_schema_view(
    get=extend_schema(tags=["Favorites"], responses={200: OpenApiTypes.STR}),
    post=extend_schema(tags=["Favorites"], request=OpenApiTypes.STR),
    delete=extend_schema(tags=["Favorites"], request=OpenApiTypes.STR),
)
class FavoritesView(APIView):
    """Favorite sessions of the calling attendee.

    POST/DELETE take the session id as the body (plain text or
    ``{"sessionId": ...}``).
    """

    permission_classes = [IsRegisteredAttendee]

    def get(self, request):
        return Response(favorite_session_ids(request.user.attendee))

    def post(self, request):
        add_favorite(request.user.attendee, _session_id_from_request(request))
        return Response(status=status.HTTP_201_CREATED)

    def delete(self, request):
        remove_favorite(request.user.attendee, _session_id_from_request(request))
        return Response(status=status.HTTP_200_OK)
