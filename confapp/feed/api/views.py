from drf_spectacular.utils import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.feed.services import get_feed_data


class FeedView(APIView):
    authentication_classes = []

    @extend_schema(tags=["Feed"], responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        return Response(get_feed_data())
