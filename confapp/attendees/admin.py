from django.contrib import admin

from confapp.attendees import models


@admin.register(models.Attendee)
class AttendeeAdmin(admin.ModelAdmin):
    list_display = ["id", "remote_ip", "created_at"]
    search_fields = ["token", "remote_ip"]
    list_filter = ["created_at"]
