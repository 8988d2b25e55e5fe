from django.contrib import admin

from confapp.schedule import models


@admin.register(models.ScheduleSnapshot)
class ScheduleSnapshotAdmin(admin.ModelAdmin):
    list_display = ["id", "source_url", "synchronized_at"]
    search_fields = ["source_url"]
    list_filter = ["synchronized_at"]
