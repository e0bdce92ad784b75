"""
Tests for the ledger applier.

Tests cover:
- Atomic increments on company and member balances
- Snapshots read back after a batch
- All-or-nothing rollback when a row is missing or the database fails
"""

import pytest
from uuid import uuid4
from unittest.mock import patch
from django.db import DatabaseError
from django.db.models import F

from apps.companies.models import Company
from apps.members.models import Member
from apps.ledger.applier import LedgerBatch, LedgerSnapshot, apply_batch
from apps.ledger.exceptions import LedgerApplyError


class TestLedgerBatch:
    """Tests for LedgerBatch helpers (no database)."""

    def test_inverted_negates_every_delta(self):
        company_id, a, b = uuid4(), uuid4(), uuid4()
        batch = LedgerBatch(company_id=company_id, company_delta=-500, member_deltas={a: -300, b: -900})

        inverted = batch.inverted()

        assert inverted.company_id == company_id
        assert inverted.company_delta == 500
        assert inverted.member_deltas == {a: 300, b: 900}

    def test_inverting_twice_is_identity(self):
        batch = LedgerBatch(company_id=uuid4(), company_delta=-7, member_deltas={uuid4(): -3})
        assert batch.inverted().inverted() == batch

    def test_total_delta(self):
        batch = LedgerBatch(company_id=uuid4(), company_delta=-500, member_deltas={uuid4(): -300, uuid4(): -900})
        assert batch.total_delta == -1700

    def test_company_delta_requires_company(self):
        with pytest.raises(ValueError):
            LedgerBatch(company_id=None, company_delta=100)


@pytest.mark.django_db
class TestApplyBatch:
    """Tests for apply_batch against the database."""

    def test_applies_company_and_member_deltas(self, ledger_company, member_a, member_b):
        batch = LedgerBatch(
            company_id=ledger_company.id,
            company_delta=-500,
            member_deltas={member_a.id: -300, member_b.id: -900},
        )

        snapshot = apply_batch(batch)

        ledger_company.refresh_from_db()
        member_a.refresh_from_db()
        member_b.refresh_from_db()
        assert ledger_company.balance == 9500
        assert member_a.balance == -300
        assert member_b.balance == -650
        assert snapshot == LedgerSnapshot(
            company_balance=9500,
            member_balances={member_a.id: -300, member_b.id: -650},
        )

    def test_applying_twice_moves_balances_twice(self, ledger_company, member_a):
        """Batches are not idempotent."""
        batch = LedgerBatch(company_id=ledger_company.id, company_delta=-100, member_deltas={member_a.id: -50})

        apply_batch(batch)
        snapshot = apply_batch(batch)

        assert snapshot.company_balance == 9800
        assert snapshot.member_balances[member_a.id] == -100

    def test_batch_then_inverse_restores_balances(self, ledger_company, member_a, member_b):
        batch = LedgerBatch(
            company_id=ledger_company.id,
            company_delta=-1234,
            member_deltas={member_a.id: -17, member_b.id: -4321},
        )

        apply_batch(batch)
        snapshot = apply_batch(batch.inverted())

        assert snapshot.company_balance == 10000
        assert snapshot.member_balances == {member_a.id: 0, member_b.id: 250}

    def test_member_only_batch(self, ledger_company, member_a):
        snapshot = apply_batch(LedgerBatch(company_id=None, member_deltas={member_a.id: 1000}))

        ledger_company.refresh_from_db()
        assert snapshot.company_balance is None
        assert snapshot.member_balances == {member_a.id: 1000}
        assert ledger_company.balance == 10000

    def test_missing_member_rolls_back_company(self, ledger_company, member_a):
        batch = LedgerBatch(
            company_id=ledger_company.id,
            company_delta=-500,
            member_deltas={member_a.id: -250, uuid4(): -250},
        )

        with pytest.raises(LedgerApplyError):
            apply_batch(batch)

        ledger_company.refresh_from_db()
        member_a.refresh_from_db()
        assert ledger_company.balance == 10000
        assert member_a.balance == 0

    def test_member_of_other_company_rejected(self, ledger_company, foreign_member):
        batch = LedgerBatch(
            company_id=ledger_company.id,
            company_delta=-500,
            member_deltas={foreign_member.id: -500},
        )

        with pytest.raises(LedgerApplyError):
            apply_batch(batch)

        ledger_company.refresh_from_db()
        foreign_member.refresh_from_db()
        assert ledger_company.balance == 10000
        assert foreign_member.balance == 0

    def test_missing_company_rejected(self, member_a):
        with pytest.raises(LedgerApplyError):
            apply_batch(LedgerBatch(company_id=uuid4(), company_delta=-1))

    def test_database_error_becomes_ledger_apply_error(self, ledger_company, member_a):
        """A failing member write rolls back the company write too."""
        batch = LedgerBatch(
            company_id=ledger_company.id,
            company_delta=-500,
            member_deltas={member_a.id: -500},
        )

        with patch('apps.ledger.applier.Member') as mock_member:
            failing = mock_member.objects.all.return_value.filter.return_value.filter.return_value
            failing.update.side_effect = DatabaseError('connection lost')

            with pytest.raises(LedgerApplyError):
                apply_batch(batch)

        ledger_company.refresh_from_db()
        assert ledger_company.balance == 10000

    def test_increments_current_row_not_loaded_value(self, ledger_company, member_a):
        """A write landing between load and apply is kept."""
        loaded_company = Company.objects.get(id=ledger_company.id)
        loaded_member = Member.objects.get(id=member_a.id)

        Company.objects.filter(id=ledger_company.id).update(balance=F('balance') + 2500)
        Member.objects.filter(id=member_a.id).update(balance=F('balance') + 300)

        snapshot = apply_batch(LedgerBatch(
            company_id=loaded_company.id,
            company_delta=-500,
            member_deltas={loaded_member.id: -500},
        ))

        assert loaded_company.balance == 10000
        assert snapshot.company_balance == 12000
        assert snapshot.member_balances == {member_a.id: -200}

    def test_interleaved_batches_both_apply(self, ledger_company, member_a, member_b):
        first = LedgerBatch(
            company_id=ledger_company.id,
            company_delta=-100,
            member_deltas={member_a.id: -100, member_b.id: -100},
        )
        second = LedgerBatch(
            company_id=ledger_company.id,
            company_delta=+40,
            member_deltas={member_b.id: +40},
        )

        apply_batch(first)
        apply_batch(second)
        apply_batch(first.inverted())

        ledger_company.refresh_from_db()
        member_a.refresh_from_db()
        member_b.refresh_from_db()
        assert ledger_company.balance == 10040
        assert member_a.balance == 0
        assert member_b.balance == 290
