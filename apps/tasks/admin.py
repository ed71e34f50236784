from django.contrib import admin
from .models import Task


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'priority', 'is_complete', 'sort_order', 'updated_at']
    list_filter = ['priority', 'is_complete']
    search_fields = ['title', 'description', 'user__email']
