from django.conf import settings
from rest_framework import serializers
from apps.ledger.money import MAX_AMOUNT
from .models import Company, Topup


# =============================================================================
# Input Serializers
# =============================================================================

class CompanyInputSerializer(serializers.ModelSerializer):
    """Validate company profile fields for create/update."""

    class Meta:
        model = Company
        fields = ['name', 'email', 'website', 'bread_price']
        extra_kwargs = {
            'bread_price': {'max_value': MAX_AMOUNT},
        }


class TopupInputSerializer(serializers.Serializer):
    """
    Validate input for recording a topup.

    Fields:
        amount (int): Positive amount in minor units
        date (date): Date of the topup
        performed_by (str): Who topped up
    """

    amount = serializers.IntegerField(min_value=1, max_value=MAX_AMOUNT)
    date = serializers.DateField()
    performed_by = serializers.CharField(max_length=200)


# =============================================================================
# Output Serializers
# =============================================================================

class CompanySerializer(serializers.ModelSerializer):
    """Main serializer for companies."""

    owner = serializers.PrimaryKeyRelatedField(read_only=True)
    currency = serializers.SerializerMethodField()

    class Meta:
        model = Company
        fields = [
            'id',
            'name',
            'email',
            'website',
            'owner',
            'balance',
            'currency',
            'bread_price',
            'last_topup',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_currency(self, obj) -> str:
        return settings.LEDGER_CURRENCY


class TopupSerializer(serializers.ModelSerializer):
    """Serializer for topup history."""

    class Meta:
        model = Topup
        fields = ['id', 'company', 'amount', 'date', 'performed_by', 'created_at']
        read_only_fields = fields


class TopupResultSerializer(serializers.Serializer):
    """Recorded topup plus the company balance after it."""

    topup = TopupSerializer()
    company_balance = serializers.IntegerField()
