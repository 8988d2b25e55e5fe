from __future__ import annotations

from typing import TYPE_CHECKING

from drf_spectacular.utils import extend_schema
from rest_framework.response import Response
from rest_framework.views import APIView

from confapp.attendees.permissions import HasAdminSecret
from confapp.audit.api.serializers import AuditLogSerializer
from confapp.audit.models import AuditLog

if TYPE_CHECKING:
    from django.db.models import QuerySet


class RecentAuditView(APIView):
    permission_classes = [HasAdminSecret]

    @extend_schema(tags=["Audit"], responses=AuditLogSerializer(many=True))
    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", "5"))
        except (TypeError, ValueError):
            limit = 5
        limit = max(1, min(limit, 50))

        qs: QuerySet[AuditLog] = AuditLog.objects.all()
        rows = list(qs[:limit])
        data = AuditLogSerializer(rows, many=True).data
        return Response({"results": data, "limit": limit})
