from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.companies.permissions import IsCompanyOwner
from apps.companies.services import CompanyNotFoundError

from .models import FoodSummary
from .serializers import (
    FoodSummaryFilterSerializer,
    FoodSummaryInputSerializer,
    FoodSummarySerializer,
    FoodSummaryListSerializer,
    LedgerSnapshotSerializer,
    SettlementPreviewSerializer,
    SettlementResultSerializer,
)
from .services import (
    ExtraHeadcount,
    preview_settlement,
    settle_food_summary,
    reverse_food_summary,
    list_food_summaries,
    # Exceptions
    InvalidInputError,
    InvalidAmountError,
    LedgerApplyError,
    SummaryNotFoundError,
)

LEDGER_UNAVAILABLE_MESSAGE = 'Could not update balances. Please try again.'
SUMMARY_NOT_REVERSIBLE_MESSAGE = 'This food summary can no longer be reversed.'


class FoodSummaryPagination(PageNumberPagination):
    """Custom pagination for food summaries."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _settlement_arguments(validated_data):
    """Map validated submission fields to service keyword arguments."""
    return {
        'company_id': validated_data['company'].id,
        'total_amount': validated_data['total_amount'],
        'breads_amount': validated_data['breads_amount'],
        'exempt_member_ids': validated_data.get('members_brought_food', []),
        'owing_member_ids': validated_data.get('members_didnt_bring_food'),
        'extras': [
            ExtraHeadcount(
                member_id=extra['member_related_to'],
                headcount=extra['no_of_people'],
            )
            for extra in validated_data.get('extra_members', [])
        ],
    }


class FoodSummaryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for FoodSummary operations.

    Summaries cannot be edited; delete and record again instead.

    list: Get food summaries of the user's companies (latest first)
    create: Record a food summary and settle it
    retrieve: Get a specific food summary
    destroy: Delete a food summary and reverse its settlement
    """

    queryset = FoodSummary.objects.select_related('company')
    serializer_class = FoodSummarySerializer
    permission_classes = [IsAuthenticated, IsCompanyOwner]
    pagination_class = FoodSummaryPagination
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        """Summaries of companies owned by the user, filtered by query params."""
        if self.action == 'list':
            filter_serializer = FoodSummaryFilterSerializer(data=self.request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            params = filter_serializer.validated_data

            return list_food_summaries(
                owner=self.request.user,
                company_id=params.get('company'),
                date_from=params.get('date_from'),
                date_to=params.get('date_to'),
            )

        return list_food_summaries(owner=self.request.user).prefetch_related(
            'members_brought_food',
            'members_didnt_bring_food',
            'extra_members',
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return FoodSummaryListSerializer
        elif self.action in ['create', 'preview']:
            return FoodSummaryInputSerializer
        return FoodSummarySerializer

    @extend_schema(responses={201: SettlementResultSerializer})
    def create(self, request, *args, **kwargs):
        """
        Record a food summary and settle it.

        POST /api/food-summaries/
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            summary, snapshot = settle_food_summary(
                date=data['date'],
                curries_amount=data['curries_amount'],
                extra_stuff_amount=data.get('extra_stuff_amount', 0),
                **_settlement_arguments(data)
            )
        except (InvalidInputError, InvalidAmountError, CompanyNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except LedgerApplyError:
            return Response(
                {'error': LEDGER_UNAVAILABLE_MESSAGE},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        output = SettlementResultSerializer({'food_summary': summary, 'ledger': snapshot})
        return Response(output.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: LedgerSnapshotSerializer})
    def destroy(self, request, *args, **kwargs):
        """
        Delete a food summary and reverse its settlement.

        DELETE /api/food-summaries/{id}/
        """
        summary = self.get_object()

        try:
            snapshot = reverse_food_summary(summary_id=summary.id)
        except SummaryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidInputError, InvalidAmountError):
            return Response(
                {'error': SUMMARY_NOT_REVERSIBLE_MESSAGE},
                status=status.HTTP_409_CONFLICT
            )
        except LedgerApplyError:
            return Response(
                {'error': LEDGER_UNAVAILABLE_MESSAGE},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        return Response(LedgerSnapshotSerializer(snapshot).data)

    @extend_schema(request=FoodSummaryInputSerializer, responses={200: SettlementPreviewSerializer})
    @action(detail=False, methods=['post'])
    def preview(self, request):
        """
        Show what recording a food summary would deduct, without saving.

        POST /api/food-summaries/preview/
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            batch = preview_settlement(**_settlement_arguments(serializer.validated_data))
        except (InvalidInputError, InvalidAmountError, CompanyNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SettlementPreviewSerializer(batch).data)
