from rest_framework import serializers

from confapp.votes.models import Vote

_RATING_NAMES = {choice.name: choice.value for choice in Vote.Rating}


class RatingField(serializers.Field):
    """Accept ``1``, ``"GOOD"`` or ``{"value": 1}``; always emit the integer."""

    default_error_messages = {
        "invalid": "Rating must be one of -1, 0, 1 (BAD, OK, GOOD).",
    }

    def to_internal_value(self, data):
        if isinstance(data, dict):
            data = data.get("value")
        if isinstance(data, str):
            name = data.strip().upper()
            if name in _RATING_NAMES:
                return _RATING_NAMES[name]
            try:
                data = int(name)
            except ValueError:
                self.fail("invalid")
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        if data not in Vote.Rating.values:
            self.fail("invalid")
        return data

    def to_representation(self, value):
        return int(value)


class VoteSerializer(serializers.ModelSerializer):
    sessionId = serializers.CharField(source="session_id")  # noqa: N815
    rating = RatingField()

    class Meta:
        model = Vote
        fields = ["sessionId", "rating"]


class VoteSubmissionSerializer(serializers.Serializer):
    sessionId = serializers.CharField(max_length=64)  # noqa: N815
    rating = RatingField()


class VoteDeletionSerializer(serializers.Serializer):
    sessionId = serializers.CharField(max_length=64)  # noqa: N815


class VotesSummarySerializer(serializers.Serializer):
    sessionId = serializers.CharField()  # noqa: N815
    good = serializers.IntegerField()
    ok = serializers.IntegerField()
    bad = serializers.IntegerField()
    total = serializers.IntegerField()
