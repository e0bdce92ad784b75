from django.core.validators import MinValueValidator
from django.db import models
import uuid


class FoodSummary(models.Model):
    """One settled lunch of a company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='food_summaries'
    )
    date = models.DateField()

    # Amounts (minor currency units)
    total_breads_amount = models.PositiveIntegerField()
    total_curries_amount = models.PositiveIntegerField()
    extra_stuff_amount = models.PositiveIntegerField(default=0)
    total_amount = models.PositiveIntegerField()

    # Who took part
    members_brought_food = models.ManyToManyField(
        'members.Member',
        through='BroughtFoodEntry',
        blank=True,
        related_name='food_summaries_brought'
    )
    members_didnt_bring_food = models.ManyToManyField(
        'members.Member',
        through='OwedFoodEntry',
        related_name='food_summaries_owed'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'food_summaries'
        indexes = [
            models.Index(fields=['company', 'date']),
        ]
        ordering = ['-date', '-created_at']
        verbose_name_plural = 'food summaries'

    def __str__(self):
        return f"{self.company.name} - {self.date} ({self.total_amount})"

    @property
    def total_extra_people(self):
        return sum(extra.no_of_people for extra in self.extra_members.all())


class ExtraMember(models.Model):
    """Guests a member hosted at a lunch; they add to that member's share."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    food_summary = models.ForeignKey(
        FoodSummary,
        on_delete=models.CASCADE,
        related_name='extra_members'
    )
    member_related_to = models.ForeignKey(
        'members.Member',
        on_delete=models.PROTECT,
        related_name='hosted_extras'
    )
    no_of_people = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = 'food_summary_extra_members'
        indexes = [
            models.Index(fields=['food_summary', 'member_related_to']),
        ]

    def __str__(self):
        return f"{self.no_of_people} extra with {self.member_related_to.name}"


class BroughtFoodEntry(models.Model):
    """Member who brought their own food to a lunch."""

    food_summary = models.ForeignKey(FoodSummary, on_delete=models.CASCADE, related_name='+')
    # Members with lunch history are never deleted
    member = models.ForeignKey('members.Member', on_delete=models.PROTECT, related_name='+')

    class Meta:
        db_table = 'food_summary_members_brought_food'
        constraints = [
            models.UniqueConstraint(
                fields=['food_summary', 'member'],
                name='unique_brought_food_entry'
            ),
        ]


class OwedFoodEntry(models.Model):
    """Member billed for a lunch."""

    food_summary = models.ForeignKey(FoodSummary, on_delete=models.CASCADE, related_name='+')
    member = models.ForeignKey('members.Member', on_delete=models.PROTECT, related_name='+')

    class Meta:
        db_table = 'food_summary_members_owed_food'
        constraints = [
            models.UniqueConstraint(
                fields=['food_summary', 'member'],
                name='unique_owed_food_entry'
            ),
        ]
