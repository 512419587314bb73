from django.contrib import admin
from .models import ScoreRecord


@admin.register(ScoreRecord)
class ScoreRecordAdmin(admin.ModelAdmin):
    list_display = ("name", "wpm", "raw_wpm", "accuracy", "mode", "config", "created_at")
    search_fields = ("name",)
    list_filter = ("mode", "config", "created_at")
    readonly_fields = ("name", "wpm", "raw_wpm", "accuracy", "mode", "config", "created_at")

    def has_add_permission(self, request):
        return False
