from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'food_summaries'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.FoodSummaryViewSet, basename='food-summary')

urlpatterns = [
    # FoodSummary ViewSet routes
    # GET    /api/food-summaries/?company={id}  - List summaries (latest first)
    # POST   /api/food-summaries/               - Record and settle a summary
    # GET    /api/food-summaries/{id}/          - Get summary details
    # DELETE /api/food-summaries/{id}/          - Delete and reverse a summary

    # Custom actions
    # POST   /api/food-summaries/preview/       - Preview deductions

    # Include router URLs
    path('', include(router.urls)),
]
