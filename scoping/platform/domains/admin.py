from django.contrib import admin

from .models import Domain


@admin.register(Domain)
class DomainAdmin(admin.ModelAdmin):
    list_display = ['name', 'domain_id', 'hostname', 'weight', 'is_active', 'is_default']
    list_filter = ['is_active', 'is_default']
    search_fields = ['name', 'domain_id', 'hostname']
    readonly_fields = ['id', 'created_at', 'updated_at']
    ordering = ['weight', 'name']
