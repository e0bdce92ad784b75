from django.contrib import admin
from .models import Company, Topup


class TopupInline(admin.TabularInline):
    """Inline admin for topups within a company."""
    model = Topup
    extra = 0
    fields = ['date', 'amount', 'performed_by', 'created_at']
    readonly_fields = ['date', 'amount', 'performed_by', 'created_at']

    def has_add_permission(self, request, obj=None):
        """Topups must go through the service so the balance moves too."""
        return False


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'balance', 'bread_price', 'last_topup', 'created_at']
    search_fields = ['name', 'email', 'owner__username']
    readonly_fields = ['id', 'balance', 'last_topup', 'created_at', 'updated_at']
    inlines = [TopupInline]

    def save_model(self, request, obj, form, change):
        """Write only the edited columns; balance moves through apps.ledger."""
        if change:
            obj.save(update_fields=form.changed_data + ['updated_at'])
        else:
            obj.save()


@admin.register(Topup)
class TopupAdmin(admin.ModelAdmin):
    list_display = ['company', 'amount', 'date', 'performed_by', 'created_at']
    list_filter = ['date']
    search_fields = ['company__name', 'performed_by']
    readonly_fields = ['id', 'company', 'amount', 'date', 'performed_by', 'created_at']

    def has_add_permission(self, request):
        return False
