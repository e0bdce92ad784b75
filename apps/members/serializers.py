from rest_framework import serializers
from apps.ledger.money import MAX_AMOUNT
from apps.companies.models import Company
from .models import Member, CashDeposit


# =============================================================================
# Input Serializers
# =============================================================================

class MemberFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for member filtering.

    Query Parameters:
        company (UUID): Filter by company ID
        active (bool): Filter by active flag
    """

    company = serializers.UUIDField(required=False)
    active = serializers.BooleanField(required=False, allow_null=True, default=None)


class MemberCreateSerializer(serializers.ModelSerializer):
    """Serializer for adding a member to a company."""

    company = serializers.PrimaryKeyRelatedField(queryset=Company.objects.all())

    class Meta:
        model = Member
        fields = ['company', 'name', 'email', 'designation', 'role']

    def validate_company(self, company):
        """Members can only be added to the user's own companies."""
        request = self.context.get('request')
        if request and not company.is_owned_by(request.user):
            raise serializers.ValidationError('You must own this company to add members')
        return company


class MemberUpdateSerializer(serializers.ModelSerializer):
    """Serializer for updating member profile fields."""

    class Meta:
        model = Member
        fields = ['name', 'email', 'designation', 'role', 'active']


class CashDepositInputSerializer(serializers.Serializer):
    """
    Validate input for recording a cash deposit.

    Fields:
        amount (int): Positive amount in minor units
        date (date): Date of the deposit
    """

    amount = serializers.IntegerField(min_value=1, max_value=MAX_AMOUNT)
    date = serializers.DateField()


# =============================================================================
# Output Serializers
# =============================================================================

class MemberSerializer(serializers.ModelSerializer):
    """Main serializer for members."""

    class Meta:
        model = Member
        fields = [
            'id',
            'company',
            'name',
            'email',
            'designation',
            'role',
            'balance',
            'last_cash_deposit',
            'active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CashDepositSerializer(serializers.ModelSerializer):
    """Serializer for cash deposit history."""

    class Meta:
        model = CashDeposit
        fields = ['id', 'member', 'amount', 'date', 'created_at']
        read_only_fields = fields


class CashDepositResultSerializer(serializers.Serializer):
    """Recorded deposit plus the member balance after it."""

    deposit = CashDepositSerializer()
    member_balance = serializers.IntegerField()
