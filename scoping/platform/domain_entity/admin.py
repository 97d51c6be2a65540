"""
Django Admin for domain entity configuration records.
Changes go through the configuration API; the admin is read-only.
"""

from django.contrib import admin

from .models import ConfigObject, EntityDisplay, FieldConfig, FieldStorageConfig


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


class FieldConfigInline(admin.TabularInline):
    model = FieldConfig
    extra = 0
    fields = ['bundle', 'behavior', 'default_domains']
    readonly_fields = fields
    can_delete = False


@admin.register(FieldStorageConfig)
class FieldStorageConfigAdmin(ReadOnlyAdmin):
    list_display = ['storage_id', 'entity_type', 'field_type', 'target_type', 'cardinality', 'locked']
    search_fields = ['storage_id', 'entity_type']
    inlines = [FieldConfigInline]


@admin.register(FieldConfig)
class FieldConfigAdmin(ReadOnlyAdmin):
    list_display = ['config_id', 'entity_type', 'bundle', 'behavior', 'default_domains']
    list_filter = ['entity_type', 'behavior']
    search_fields = ['config_id', 'bundle']


@admin.register(EntityDisplay)
class EntityDisplayAdmin(ReadOnlyAdmin):
    list_display = ['entity_type', 'bundle', 'context', 'mode']
    list_filter = ['context', 'entity_type']


@admin.register(ConfigObject)
class ConfigObjectAdmin(ReadOnlyAdmin):
    list_display = ['name', 'updated_at']
