from django.core.validators import MinValueValidator
from django.db import models
import uuid


class Member(models.Model):
    """Team member taking part in shared lunches."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='members'
    )
    name = models.CharField(max_length=200)
    email = models.EmailField()
    designation = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=100, blank=True)

    # Ledger (minor currency units); mutated only through apps.ledger
    balance = models.IntegerField(default=0)
    last_cash_deposit = models.DateField(null=True, blank=True)

    active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'members'
        indexes = [
            models.Index(fields=['company', 'active']),
            models.Index(fields=['email']),
        ]
        ordering = ['name', 'created_at']

    def __str__(self):
        return f"{self.name} ({self.company.name})"


class CashDeposit(models.Model):
    """Cash handed in by a member, credited to their balance."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(
        Member,
        on_delete=models.CASCADE,
        related_name='cash_deposits'
    )
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'member_cash_deposits'
        indexes = [
            models.Index(fields=['member', 'date']),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.member.name} +{self.amount} ({self.date})"
