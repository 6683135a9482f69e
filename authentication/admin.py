from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("email", "name", "role", "is_staff", "date_joined")
    list_filter = ("role", "is_staff", "is_superuser", "is_active")
    search_fields = ("email", "name", "username")
    ordering = ("-date_joined",)

    fieldsets = UserAdmin.fieldsets + (("Marketplace", {"fields": ("name", "role")}),)
    add_fieldsets = UserAdmin.add_fieldsets + (("Marketplace", {"fields": ("email", "name", "role")}),)
