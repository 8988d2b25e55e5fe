from django.contrib import admin

from confapp.votes import models


@admin.register(models.Vote)
class VoteAdmin(admin.ModelAdmin):
    list_display = ["id", "attendee", "session_id", "rating", "updated_at"]
    search_fields = ["session_id"]
    list_filter = ["rating", "updated_at"]
