from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.ledger.exceptions import InvalidAmountError, LedgerApplyError

from .models import Company
from .permissions import IsCompanyOwner
from .serializers import (
    CompanySerializer,
    CompanyInputSerializer,
    TopupInputSerializer,
    TopupSerializer,
    TopupResultSerializer,
)
from .services import (
    create_company,
    update_company,
    get_company_for_owner,
    list_companies,
    record_topup,
    list_topups,
    # Exceptions
    CompanyNotFoundError,
    InsufficientPermissionsError,
)


class CompanyPagination(PageNumberPagination):
    """Custom pagination for companies and their history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CompanyViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Company operations.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get companies owned by the user
    create: Create a new company
    retrieve: Get a specific company
    update: Update company profile (owner only)
    partial_update: Partially update company profile (owner only)
    """

    queryset = Company.objects.select_related('owner')
    serializer_class = CompanySerializer
    permission_classes = [IsAuthenticated, IsCompanyOwner]
    pagination_class = CompanyPagination
    http_method_names = ['get', 'post', 'put', 'patch', 'head', 'options']

    def get_queryset(self):
        """Return only companies owned by the user."""
        return list_companies(owner=self.request.user).select_related('owner')

    def get_serializer_class(self):
        """Use input serializer for writes."""
        if self.action in ['create', 'update', 'partial_update']:
            return CompanyInputSerializer
        return CompanySerializer

    @extend_schema(responses={201: CompanySerializer})
    def create(self, request, *args, **kwargs):
        """Create a new company owned by the user."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        company = create_company(owner=request.user, **serializer.validated_data)

        return Response(CompanySerializer(company).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: CompanySerializer})
    def update(self, request, *args, **kwargs):
        """Update company profile."""
        partial = kwargs.pop('partial', False)
        company = self.get_object()
        serializer = self.get_serializer(company, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            company = update_company(
                company_id=company.id,
                user=request.user,
                **serializer.validated_data
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(CompanySerializer(company).data)

    @extend_schema(responses={200: CompanySerializer})
    @action(detail=False, methods=['get'])
    def mine(self, request):
        """
        Get the user's company.

        GET /api/companies/mine/
        """
        try:
            company = get_company_for_owner(owner=request.user)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(CompanySerializer(company).data)

    @extend_schema(request=TopupInputSerializer, responses={201: TopupResultSerializer})
    @action(detail=True, methods=['post'])
    def topup(self, request, pk=None):
        """
        Credit the company balance.

        POST /api/companies/{id}/topup/
        Body: {"amount": 5000, "date": "2024-01-31", "performed_by": "Finance"}
        """
        company = self.get_object()

        input_serializer = TopupInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            topup, balance = record_topup(company_id=company.id, **input_serializer.validated_data)
        except (InvalidAmountError, CompanyNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except LedgerApplyError:
            return Response(
                {'error': 'Could not record the topup. Please try again.'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        output = TopupResultSerializer({'topup': topup, 'company_balance': balance})
        return Response(output.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: TopupSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def topups(self, request, pk=None):
        """
        Get topup history of the company.

        GET /api/companies/{id}/topups/
        """
        company = self.get_object()
        queryset = list_topups(company_id=company.id)

        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(TopupSerializer(page, many=True).data)
        return Response(TopupSerializer(queryset, many=True).data)
