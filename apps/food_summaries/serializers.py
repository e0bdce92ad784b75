from rest_framework import serializers
from apps.companies.models import Company
from apps.ledger.money import MAX_AMOUNT
from .models import FoodSummary, ExtraMember
from .services.participants import MAX_HEADCOUNT


# =============================================================================
# Input Serializers
# =============================================================================

class FoodSummaryFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for food summary filtering.

    Query Parameters:
        company (UUID): Filter by company ID
        date_from (date): Lunches from this date
        date_to (date): Lunches up to this date
    """

    company = serializers.UUIDField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'End date must be after start date'
            })

        return attrs


class ExtraMemberInputSerializer(serializers.Serializer):
    """Guests hosted by one member."""

    member_related_to = serializers.UUIDField()
    no_of_people = serializers.IntegerField(min_value=1, max_value=MAX_HEADCOUNT)


class FoodSummaryInputSerializer(serializers.Serializer):
    """
    Validate a food summary submission.

    Amounts are integers in minor currency units. When
    ``members_didnt_bring_food`` is omitted, every active member of the
    company who is not in ``members_brought_food`` is billed.
    """

    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())
    date = serializers.DateField()
    breads_amount = serializers.IntegerField(min_value=0, max_value=MAX_AMOUNT)
    curries_amount = serializers.IntegerField(min_value=0, max_value=MAX_AMOUNT)
    extra_stuff_amount = serializers.IntegerField(
        min_value=0,
        max_value=MAX_AMOUNT,
        required=False,
        default=0
    )
    total_amount = serializers.IntegerField(min_value=0, max_value=MAX_AMOUNT)
    members_brought_food = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list
    )
    members_didnt_bring_food = serializers.ListField(
        child=serializers.UUIDField(),
        required=False
    )
    extra_members = ExtraMemberInputSerializer(many=True, required=False)

    def validate_company(self, company):
        """Summaries can only be recorded for the user's own companies."""
        request = self.context.get('request')
        if request and not company.is_owned_by(request.user):
            raise serializers.ValidationError('You must own this company to record food summaries')
        return company

    def validate(self, attrs):
        """Total must be the sum of its parts."""
        expected = (
            attrs['breads_amount']
            + attrs['curries_amount']
            + attrs.get('extra_stuff_amount', 0)
        )
        if attrs['total_amount'] != expected:
            raise serializers.ValidationError({
                'total_amount': 'Total amount must equal breads + curries + extra stuff'
            })
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class ExtraMemberSerializer(serializers.ModelSerializer):
    """Serializer for stored guest entries."""

    class Meta:
        model = ExtraMember
        fields = ['id', 'member_related_to', 'no_of_people']
        read_only_fields = fields


class FoodSummarySerializer(serializers.ModelSerializer):
    """Main serializer for food summaries."""

    extra_members = ExtraMemberSerializer(many=True, read_only=True)

    class Meta:
        model = FoodSummary
        fields = [
            'id',
            'company',
            'date',
            'total_breads_amount',
            'total_curries_amount',
            'extra_stuff_amount',
            'total_amount',
            'members_brought_food',
            'members_didnt_bring_food',
            'extra_members',
            'created_at',
        ]
        read_only_fields = fields


class FoodSummaryListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    class Meta:
        model = FoodSummary
        fields = [
            'id',
            'company',
            'date',
            'total_breads_amount',
            'total_curries_amount',
            'extra_stuff_amount',
            'total_amount',
            'created_at',
        ]
        read_only_fields = fields


class LedgerSnapshotSerializer(serializers.Serializer):
    """Balances after a settlement or reversal."""

    company_balance = serializers.IntegerField(allow_null=True)
    member_balances = serializers.DictField(child=serializers.IntegerField())


class SettlementPreviewSerializer(serializers.Serializer):
    """Deltas a food summary would apply."""

    company_delta = serializers.IntegerField()
    member_deltas = serializers.DictField(child=serializers.IntegerField())
    total_delta = serializers.IntegerField()


class SettlementResultSerializer(serializers.Serializer):
    """Recorded food summary plus the balances after settlement."""

    food_summary = FoodSummarySerializer()
    ledger = LedgerSnapshotSerializer()
