from django.contrib import admin

from confapp.favorites import models


@admin.register(models.Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ["id", "attendee", "session_id", "created_at"]
    search_fields = ["session_id"]
    list_filter = ["created_at"]
