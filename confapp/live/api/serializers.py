from rest_framework import serializers


class LiveVideoUpdateSerializer(serializers.Serializer):
    roomId = serializers.IntegerField(min_value=0)  # noqa: N815
    video = serializers.CharField(
        max_length=500,
        required=False,
        allow_blank=True,
        allow_null=True,
    )


class LiveVideoSerializer(serializers.Serializer):
    room = serializers.IntegerField()
    video = serializers.CharField()
