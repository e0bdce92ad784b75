from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'companies'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.CompanyViewSet, basename='company')

urlpatterns = [
    # Company ViewSet routes
    # GET    /api/companies/               - List user's companies
    # POST   /api/companies/               - Create company
    # GET    /api/companies/{id}/          - Get company details
    # PUT    /api/companies/{id}/          - Update company (owner)
    # PATCH  /api/companies/{id}/          - Partial update (owner)

    # Custom company actions
    # GET    /api/companies/mine/          - Get the user's company
    # POST   /api/companies/{id}/topup/    - Record a topup
    # GET    /api/companies/{id}/topups/   - Topup history

    # Include router URLs
    path('', include(router.urls)),
]
