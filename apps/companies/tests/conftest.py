import pytest
from datetime import date
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.companies.models import Company, Topup


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def company_owner(db):
    """Create and return a user who owns a company."""
    return get_user_model().objects.create_user(
        username='owner',
        email='owner@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def other_user(db):
    """Create and return a user who owns nothing."""
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
    """Create a company with a balance of 10000."""
    return Company.objects.create(
        name='Acme Lunches',
        email='lunch@acme.example',
        website='https://acme.example',
        owner=company_owner,
        balance=10000,
        bread_price=25,
    )


@pytest.fixture
def topup(db, company):
    """Create a stored topup (balance not touched)."""
    return Topup.objects.create(
        company=company,
        amount=5000,
        date=date(2024, 1, 15),
        performed_by='Finance',
    )
