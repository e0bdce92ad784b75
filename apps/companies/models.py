from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class Company(models.Model):
    """Tenant company whose team shares lunch costs."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    website = models.URLField(blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='companies'
    )

    # Ledger (minor currency units); mutated only through apps.ledger
    balance = models.IntegerField(default=0)
    bread_price = models.PositiveIntegerField(null=True, blank=True)
    last_topup = models.DateField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'companies'
        indexes = [
            models.Index(fields=['owner', 'created_at']),
        ]
        ordering = ['created_at']
        verbose_name_plural = 'companies'

    def __str__(self):
        return self.name

    def is_owned_by(self, user):
        return self.owner_id == getattr(user, 'id', None)


class Topup(models.Model):
    """Money added to the company balance."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name='topups'
    )
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    date = models.DateField()
    performed_by = models.CharField(max_length=200)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'company_topups'
        indexes = [
            models.Index(fields=['company', 'date']),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.company.name} +{self.amount} ({self.date})"
