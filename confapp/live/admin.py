from django.contrib import admin

from confapp.live import models


@admin.register(models.LiveVideo)
class LiveVideoAdmin(admin.ModelAdmin):
    list_display = ["room_id", "video", "updated_at"]
    search_fields = ["video"]
