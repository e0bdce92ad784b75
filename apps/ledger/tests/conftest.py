import pytest
from django.contrib.auth import get_user_model
from apps.companies.models import Company
from apps.members.models import Member


@pytest.fixture
def ledger_owner(db):
    """Create and return the company owner."""
    return get_user_model().objects.create_user(
        username='ledger-owner',
        email='owner@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def ledger_company(db, ledger_owner):
    """Company with a balance of 10000."""
    return Company.objects.create(name='Acme Lunches', owner=ledger_owner, balance=10000)


@pytest.fixture
def other_company(db, ledger_owner):
    """A second company of the same owner."""
    return Company.objects.create(name='Other Co', owner=ledger_owner, balance=0)


@pytest.fixture
def member_a(db, ledger_company):
    return Member.objects.create(company=ledger_company, name='Alice', email='alice@example.com')


@pytest.fixture
def member_b(db, ledger_company):
    return Member.objects.create(
        company=ledger_company, name='Bob', email='bob@example.com', balance=250
    )


@pytest.fixture
def foreign_member(db, other_company):
    return Member.objects.create(company=other_company, name='Zed', email='zed@example.com')
