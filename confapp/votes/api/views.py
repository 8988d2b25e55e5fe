from django.db import transaction
from drf_spectacular.utils import OpenApiResponse
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.attendees.permissions import HasAdminSecret
from confapp.attendees.permissions import IsRegisteredAttendee
from confapp.clock import to_epoch_millis
from confapp.clock.api.views import ClockViewMixin
from confapp.realtime.events.votes import publish_votes_changed
from confapp.votes.api.serializers import VoteDeletionSerializer
from confapp.votes.api.serializers import VoteSerializer
from confapp.votes.api.serializers import VotesSummarySerializer
from confapp.votes.api.serializers import VoteSubmissionSerializer
from confapp.votes.models import Vote
from confapp.votes.services import SessionNotFoundError
from confapp.votes.services import VoteOutcome
from confapp.votes.services import delete_vote
from confapp.votes.services import submit_vote
from confapp.votes.services import votes_summary

# Informational answer for ratings sent before the session started. Clients
# show "voting opens at session start" for this code instead of an error.
HTTP_477_COME_BACK_LATER = 477
COME_BACK_LATER_REASON = "Come Back Later"


def come_back_later(starts_at) -> Response:
    response = Response(
        {
            "detail": "Voting opens when the session starts.",
            "startsAt": to_epoch_millis(starts_at) if starts_at else None,
        },
        status=HTTP_477_COME_BACK_LATER,
    )
    response.reason_phrase = COME_BACK_LATER_REASON
    return response


class VotesView(ClockViewMixin, APIView):
    permission_classes = [IsRegisteredAttendee]

    @extend_schema(tags=["Votes"], responses=VoteSerializer(many=True))
    def get(self, request):
        votes = Vote.objects.filter(attendee=request.user.attendee)
        return Response(VoteSerializer(votes, many=True).data)

    @extend_schema(
        tags=["Votes"],
        request=VoteSubmissionSerializer,
        responses={
            201: OpenApiResponse(description="First vote for this session"),
            200: OpenApiResponse(description="Existing vote revised"),
            404: OpenApiResponse(description="Unknown session"),
            HTTP_477_COME_BACK_LATER: OpenApiResponse(
                description="Session has not started yet"
            ),
        },
    )
    def post(self, request):
        serializer = VoteSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = submit_vote(
                request.user.attendee,
                data["sessionId"],
                data["rating"],
                clock=self.get_clock(),
            )
        except SessionNotFoundError as exc:
            raise NotFound(str(exc)) from exc

        if result.outcome is VoteOutcome.TOO_EARLY:
            return come_back_later(result.session.starts_at)
        attendee = request.user.attendee
        session_id = result.session.id
        transaction.on_commit(lambda: publish_votes_changed(attendee, session_id))
        if result.outcome is VoteOutcome.CREATED:
            return Response(status=status.HTTP_201_CREATED)
        return Response(status=status.HTTP_200_OK)

    @extend_schema(tags=["Votes"], request=VoteDeletionSerializer)
    def delete(self, request):
        serializer = VoteDeletionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        attendee = request.user.attendee
        session_id = serializer.validated_data["sessionId"]
        if delete_vote(attendee, session_id):
            transaction.on_commit(
                lambda: publish_votes_changed(attendee, session_id)
            )
        return Response(status=status.HTTP_200_OK)


class AllVotesView(APIView):
    permission_classes = [HasAdminSecret]

    @extend_schema(tags=["Votes"], responses=VoteSerializer(many=True))
    def get(self, request):
        votes = Vote.objects.all()
        return Response(VoteSerializer(votes, many=True).data)


class VotesSummaryView(APIView):
    permission_classes = [HasAdminSecret]

    @extend_schema(tags=["Votes"], responses=VotesSummarySerializer)
    def get(self, request, session_id: str):
        return Response(VotesSummarySerializer(votes_summary(session_id)).data)
