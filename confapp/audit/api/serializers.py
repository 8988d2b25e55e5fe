from rest_framework import serializers

from confapp.audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = AuditLog
        fields = [
            "id",
            "action",
            "actor",
            "message",
            "before",
            "after",
            "ip_address",
            "created_at",
        ]
