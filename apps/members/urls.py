from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'members'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.MemberViewSet, basename='member')

urlpatterns = [
    # Member ViewSet routes
    # GET    /api/members/?company={id}&active=true  - List members
    # POST   /api/members/                           - Add member
    # GET    /api/members/{id}/                      - Get member details
    # PUT    /api/members/{id}/                      - Update member
    # PATCH  /api/members/{id}/                      - Partial update
    # DELETE /api/members/{id}/                      - Deactivate member

    # Custom member actions
    # POST   /api/members/{id}/cash_deposit/         - Record a cash deposit
    # GET    /api/members/{id}/cash_deposits/        - Deposit history

    # Include router URLs
    path('', include(router.urls)),
]
