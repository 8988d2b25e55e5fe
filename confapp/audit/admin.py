from django.contrib import admin

from confapp.audit import models


@admin.register(models.AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["id", "action", "actor", "message", "created_at"]
    search_fields = ["action", "message", "ip_address"]
    list_filter = ["created_at"]
