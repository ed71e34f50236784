from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['email', 'first_name', 'last_name', 'created_at']
    search_fields = ['email', 'first_name', 'last_name']
    readonly_fields = ['password_hash', 'created_at', 'updated_at']
