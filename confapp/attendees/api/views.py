import logging

from drf_spectacular.utils import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.attendees.models import Attendee
from confapp.attendees.parsers import read_scalar
from confapp.audit.utils import get_remote_ip

logger = logging.getLogger(__name__)

TOKEN_MAX_LENGTH = Attendee._meta.get_field("token").max_length  # noqa: SLF001


class AttendeeRegistrationView(APIView):
    """Register an app installation by its self-generated token.

    The body is the token itself (``text/plain``) or ``{"token": "..."}``.
    """

    authentication_classes = []

    @extend_schema(
        tags=["Attendees"],
        request=OpenApiTypes.STR,
        responses={201: None, 409: None},
    )
    def post(self, request):
        token = read_scalar(request.data, "token", "userId", "uuid")
        if not token:
            raise ValidationError({"token": "This field is required."})
        if len(token) > TOKEN_MAX_LENGTH:
            msg = f"Ensure this field has no more than {TOKEN_MAX_LENGTH} characters."
            raise ValidationError({"token": msg})

        _, created = Attendee.objects.get_or_create(
            token=token,
            defaults={"remote_ip": get_remote_ip(request)},
        )
        if not created:
            return Response(status=status.HTTP_409_CONFLICT)
        logger.info("Registered attendee from %s", get_remote_ip(request) or "-")
        return Response(status=status.HTTP_201_CREATED)


class AttendeeCountView(APIView):
    authentication_classes = []

    @extend_schema(tags=["Attendees"], responses={200: OpenApiTypes.INT})
    def get(self, request):
        return Response(Attendee.objects.count())
