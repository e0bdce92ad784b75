from django.contrib import admin
from .models import FoodSummary, ExtraMember


class ExtraMemberInline(admin.TabularInline):
    """Inline admin for guest entries within a food summary."""
    model = ExtraMember
    extra = 0
    fields = ['member_related_to', 'no_of_people']
    readonly_fields = ['member_related_to', 'no_of_people']

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(FoodSummary)
class FoodSummaryAdmin(admin.ModelAdmin):
    """
    Read-only admin for food summaries.

    Summaries are settled against balances when recorded, so they are
    created and deleted through the API only.
    """

    list_display = [
        'date',
        'company',
        'total_breads_amount',
        'total_curries_amount',
        'extra_stuff_amount',
        'total_amount',
        'created_at',
    ]
    list_filter = ['date', 'company']
    date_hierarchy = 'date'
    readonly_fields = [
        'id',
        'company',
        'date',
        'total_breads_amount',
        'total_curries_amount',
        'extra_stuff_amount',
        'total_amount',
        'members_brought_food',
        'members_didnt_bring_food',
        'created_at',
    ]
    inlines = [ExtraMemberInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
