import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.companies.models import Company
from apps.members.models import Member


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def company_owner(db):
    return get_user_model().objects.create_user(
        username='owner',
        email='owner@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def other_user(db):
    return get_user_model().objects.create_user(
        username='other',
        email='other@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def owner_client(api_client, company_owner):
    """Return API client authenticated as the company owner."""
    refresh = RefreshToken.for_user(company_owner)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def other_client(api_client, other_user):
    """Return API client authenticated as the other user."""
    refresh = RefreshToken.for_user(other_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def company(db, company_owner):
    """Company with a balance of 10000."""
    return Company.objects.create(name='Acme Lunches', owner=company_owner, balance=10000)


@pytest.fixture
def other_company(db, other_user):
    return Company.objects.create(name='Other Co', owner=other_user, balance=500)


@pytest.fixture
def member_a(db, company):
    return Member.objects.create(company=company, name='Alice', email='alice@acme.example')


@pytest.fixture
def member_b(db, company):
    return Member.objects.create(company=company, name='Bob', email='bob@acme.example')


@pytest.fixture
def member_c(db, company):
    return Member.objects.create(company=company, name='Carol', email='carol@acme.example')


@pytest.fixture
def team(member_a, member_b, member_c):
    """The three active members of the company."""
    return member_a, member_b, member_c


@pytest.fixture
def inactive_member(db, company):
    return Member.objects.create(
        company=company,
        name='Dan',
        email='dan@acme.example',
        active=False,
    )
