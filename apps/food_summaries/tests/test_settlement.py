"""Tests for settlement and reversal deltas."""

import pytest
from datetime import date
from uuid import uuid4

from apps.food_summaries.models import FoodSummary, ExtraMember
from apps.food_summaries.services import (
    InvalidAmountError,
    ParticipantWeights,
    compute_reversal,
    compute_settlement,
    weights_for_summary,
)


COMPANY = uuid4()
A, B, C = uuid4(), uuid4(), uuid4()


class TestComputeSettlement:
    """Tests for compute_settlement() (no database)."""

    def test_even_split(self):
        batch = compute_settlement(
            company_id=COMPANY,
            total_amount=2000,
            breads_amount=500,
            participants=ParticipantWeights(weights={A: 1, B: 1, C: 1}),
        )

        assert batch.company_id == COMPANY
        assert batch.company_delta == -500
        assert batch.member_deltas == {A: -500, B: -500, C: -500}
        assert batch.total_delta == -2000

    def test_split_with_guests(self):
        batch = compute_settlement(
            company_id=COMPANY,
            total_amount=1200,
            breads_amount=0,
            participants=ParticipantWeights(weights={A: 1, B: 3}),
        )

        assert batch.company_delta == 0
        assert batch.member_deltas == {A: -300, B: -900}

    def test_rounding_drift_not_redistributed(self):
        """Each share is rounded on its own."""
        batch = compute_settlement(
            company_id=COMPANY,
            total_amount=100,
            breads_amount=0,
            participants=ParticipantWeights(weights={A: 1, B: 1, C: 1}),
        )

        assert batch.member_deltas == {A: -33, B: -33, C: -33}
        assert batch.total_delta == -99

    def test_half_rounds_away_from_zero(self):
        batch = compute_settlement(
            company_id=COMPANY,
            total_amount=5,
            breads_amount=0,
            participants=ParticipantWeights(weights={A: 1, B: 1}),
        )

        assert batch.member_deltas == {A: -3, B: -3}

    @pytest.mark.parametrize('remainder,weights', [
        (1000, {A: 1, B: 2, C: 4}),
        (997, {A: 3, B: 5}),
        (1, {A: 1, B: 1, C: 1}),
        (0, {A: 2}),
    ])
    def test_drift_bounded_by_total_weight(self, remainder, weights):
        participants = ParticipantWeights(weights=weights)
        batch = compute_settlement(
            company_id=COMPANY,
            total_amount=remainder + 250,
            breads_amount=250,
            participants=participants,
        )

        charged = -sum(batch.member_deltas.values())
        assert abs(charged - remainder) <= participants.total_weight - 1
        assert all(delta <= 0 for delta in batch.member_deltas.values())

    def test_breads_exceeding_total(self):
        with pytest.raises(InvalidAmountError):
            compute_settlement(
                company_id=COMPANY,
                total_amount=100,
                breads_amount=101,
                participants=ParticipantWeights(weights={A: 1}),
            )

    @pytest.mark.parametrize('total,breads', [(-1, 0), (100, -1), (100.0, 0), ('100', 0)])
    def test_invalid_amounts(self, total, breads):
        with pytest.raises(InvalidAmountError):
            compute_settlement(
                company_id=COMPANY,
                total_amount=total,
                breads_amount=breads,
                participants=ParticipantWeights(weights={A: 1}),
            )

    def test_nobody_to_bill(self):
        with pytest.raises(InvalidAmountError):
            compute_settlement(
                company_id=COMPANY,
                total_amount=100,
                breads_amount=0,
                participants=ParticipantWeights(weights={}),
            )

    def test_non_positive_weight(self):
        with pytest.raises(InvalidAmountError):
            compute_settlement(
                company_id=COMPANY,
                total_amount=100,
                breads_amount=0,
                participants=ParticipantWeights(weights={A: 1, B: 0}),
            )


@pytest.mark.django_db
class TestComputeReversal:
    """Tests for compute_reversal() on stored summaries."""

    def _store(self, company, owing, exempt=(), extras=(), total=2000, breads=500):
        summary = FoodSummary.objects.create(
            company=company,
            date=date(2024, 1, 15),
            total_breads_amount=breads,
            total_curries_amount=total - breads,
            total_amount=total,
        )
        summary.members_didnt_bring_food.set(owing)
        summary.members_brought_food.set(exempt)
        for member, headcount in extras:
            ExtraMember.objects.create(
                food_summary=summary,
                member_related_to=member,
                no_of_people=headcount,
            )
        return summary

    def test_reversal_inverts_settlement(self, company, team):
        a, b, c = team
        summary = self._store(company, owing=[a, b], exempt=[c], extras=[(b, 2), (c, 1)])

        batch = compute_reversal(summary)

        # weights a=1, b=3, c=1 over a remainder of 1500
        assert batch.company_id == company.id
        assert batch.company_delta == 500
        assert batch.member_deltas == {a.id: 300, b.id: 900, c.id: 300}

    def test_reversal_ignores_current_active_flag(self, company, team):
        a, b, c = team
        summary = self._store(company, owing=[a, b, c])
        c.active = False
        c.save()

        weights = weights_for_summary(summary)

        assert weights.weights == {a.id: 1, b.id: 1, c.id: 1}
        assert compute_reversal(summary).member_deltas[c.id] == 500
