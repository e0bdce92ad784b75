from django.contrib import admin
from .models import Member, CashDeposit


class CashDepositInline(admin.TabularInline):
    """Inline admin for cash deposits within a member."""
    model = CashDeposit
    extra = 0
    fields = ['date', 'amount', 'created_at']
    readonly_fields = ['date', 'amount', 'created_at']

    def has_add_permission(self, request, obj=None):
        """Deposits must go through the service so the balance moves too."""
        return False


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'company', 'balance', 'active', 'last_cash_deposit']
    list_filter = ['active', 'company']
    search_fields = ['name', 'email', 'company__name']
    readonly_fields = ['id', 'balance', 'last_cash_deposit', 'created_at', 'updated_at']
    inlines = [CashDepositInline]

    def save_model(self, request, obj, form, change):
        """Write only the edited columns; balance moves through apps.ledger."""
        if change:
            obj.save(update_fields=form.changed_data + ['updated_at'])
        else:
            obj.save()

    def has_delete_permission(self, request, obj=None):
        """Members are deactivated, never deleted."""
        return False


@admin.register(CashDeposit)
class CashDepositAdmin(admin.ModelAdmin):
    list_display = ['member', 'amount', 'date', 'created_at']
    list_filter = ['date']
    search_fields = ['member__name', 'member__email']
    readonly_fields = ['id', 'member', 'amount', 'date', 'created_at']

    def has_add_permission(self, request):
        return False
