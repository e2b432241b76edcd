from django.contrib import admin, messages
from django.utils.html import format_html

from .models import Transaction, FundSnapshot, TransactionStatus
from .services import recompute_fund
from .services.exceptions import StoreFailureError


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Read-mostly admin for room transactions.

    Status changes go through the ledger services so the fund snapshot
    stays in sync; editing rows here would bypass that.
    """

    list_display = [
        'id',
        'room',
        'user',
        'type',
        'amount',
        'status_badge',
        'reimbursed',
        'transaction_date',
    ]
    list_filter = ['type', 'status', 'reimbursed', 'transaction_date']
    search_fields = ['notes', 'reference_id', 'merchant_upi_id', 'user__email', 'room__name']
    readonly_fields = [field.name for field in Transaction._meta.fields]
    date_hierarchy = 'transaction_date'

    def status_badge(self, obj):
        """Display status as colored badge."""
        colors = {
            TransactionStatus.PENDING: ('#E5C49A', '#2C1810'),
            TransactionStatus.CONFIRMED: ('#6B8E5E', 'white'),
            TransactionStatus.REJECTED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(FundSnapshot)
class FundSnapshotAdmin(admin.ModelAdmin):
    list_display = ['room', 'total_contributions', 'total_reimbursements', 'current_balance', 'updated_at']
    readonly_fields = ['room', 'total_contributions', 'total_reimbursements', 'current_balance', 'created_at', 'updated_at']
    actions = ['recompute_selected']

    def recompute_selected(self, request, queryset):
        """Rebuild the selected snapshots from confirmed transactions."""
        recomputed = 0
        for snapshot in queryset:
            try:
                recompute_fund(room_id=snapshot.room_id)
            except StoreFailureError as e:
                self.message_user(request, f'{snapshot.room}: {e}', level=messages.ERROR)
                continue
            recomputed += 1
        self.message_user(request, f'{recomputed} fund(s) recomputed.')
    recompute_selected.short_description = 'Recompute selected funds'

    def has_add_permission(self, request):
        return False
