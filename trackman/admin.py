"""
Trackman Admin.

Provides views for production debugging:
- Company: list + edit
- Product: edit descriptive data; lifecycle fields read-only
- Movement: read-only ledger
- AuditLog: read-only audit trail
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from trackman.models import AuditLog, Company, Movement, Product


class ReadOnlyAdmin(admin.ModelAdmin):
    """Append-only records: no add, change or delete from the admin."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# COMPANY ADMIN
# =========================================================================

@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['name', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name']


# =========================================================================
# PRODUCT ADMIN (status only changes via lifecycle service)
# =========================================================================

class MovementInline(admin.TabularInline):
    model = Movement
    extra = 0
    can_delete = False
    fields = ['created_at', 'previous_status', 'new_status', 'location', 'reason', 'user']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Product admin — status, last_moved_at and shipped_at are read-only."""

    list_display = ['internal_code', 'description', 'company', 'status',
                    'current_location', 'is_final_display', 'last_moved_at']
    list_filter = ['status', 'company']
    search_fields = ['internal_code', 'description']
    readonly_fields = ['status', 'last_moved_at', 'shipped_at', 'created_at', 'updated_at']
    inlines = [MovementInline]

    def has_delete_permission(self, request, obj=None):
        # Movements protect products; elimination is a status
        return False

    @admin.display(description=_('Final?'), boolean=True)
    def is_final_display(self, obj):
        return obj.is_final


# =========================================================================
# MOVEMENT ADMIN (read-only ledger)
# =========================================================================

@admin.register(Movement)
class MovementAdmin(ReadOnlyAdmin):
    list_display = ['created_at', 'product', 'previous_status', 'new_status', 'reason', 'user']
    list_filter = ['new_status', 'created_at']
    search_fields = ['reason', 'product__internal_code']
    date_hierarchy = 'created_at'


# =========================================================================
# AUDIT LOG ADMIN (read-only)
# =========================================================================

@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdmin):
    list_display = ['created_at', 'action', 'entity', 'entity_id', 'user', 'company']
    list_filter = ['action', 'entity', 'company']
    search_fields = ['entity_id']
    date_hierarchy = 'created_at'
