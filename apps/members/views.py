from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.companies.permissions import IsCompanyOwner
from apps.companies.services import CompanyNotFoundError
from apps.ledger.exceptions import InvalidAmountError, LedgerApplyError

from .models import Member
from .serializers import (
    MemberSerializer,
    MemberCreateSerializer,
    MemberUpdateSerializer,
    MemberFilterSerializer,
    CashDepositInputSerializer,
    CashDepositSerializer,
    CashDepositResultSerializer,
)
from .services import (
    create_member,
    list_members,
    update_member,
    deactivate_member,
    record_cash_deposit,
    list_cash_deposits,
    # Exceptions
    MemberNotFoundError,
)


class MemberPagination(PageNumberPagination):
    """Custom pagination for members and deposits."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class MemberViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Member operations.

    list: Get members of the user's companies (filter by company/active)
    create: Add a member to a company
    retrieve: Get a specific member
    update: Update a member
    partial_update: Partially update a member
    destroy: Deactivate a member (records are never deleted)
    """

    queryset = Member.objects.select_related('company')
    serializer_class = MemberSerializer
    permission_classes = [IsAuthenticated, IsCompanyOwner]
    pagination_class = MemberPagination

    def get_queryset(self):
        """Members of companies owned by the user, filtered by query params."""
        if self.action == 'list':
            filter_serializer = MemberFilterSerializer(data=self.request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            params = filter_serializer.validated_data

            return list_members(
                owner=self.request.user,
                company_id=params.get('company'),
                active=params.get('active'),
            )

        return list_members(owner=self.request.user)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return MemberCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return MemberUpdateSerializer
        return MemberSerializer

    @extend_schema(responses={201: MemberSerializer})
    def create(self, request, *args, **kwargs):
        """Add a member to one of the user's companies."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            member = create_member(
                company_id=data['company'].id,
                name=data['name'],
                email=data['email'],
                designation=data.get('designation', ''),
                role=data.get('role', ''),
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(MemberSerializer(member).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: MemberSerializer})
    def update(self, request, *args, **kwargs):
        """Update member profile fields."""
        partial = kwargs.pop('partial', False)
        member = self.get_object()
        serializer = self.get_serializer(member, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            member = update_member(member_id=member.id, **serializer.validated_data)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(MemberSerializer(member).data)

    def destroy(self, request, *args, **kwargs):
        """Deactivate a member."""
        member = self.get_object()
        try:
            deactivate_member(member_id=member.id)
        except MemberNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=CashDepositInputSerializer, responses={201: CashDepositResultSerializer})
    @action(detail=True, methods=['post'])
    def cash_deposit(self, request, pk=None):
        """
        Credit cash handed in by the member.

        POST /api/members/{id}/cash_deposit/
        Body: {"amount": 1000, "date": "2024-01-31"}
        """
        member = self.get_object()

        input_serializer = CashDepositInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            deposit, balance = record_cash_deposit(
                member_id=member.id,
                **input_serializer.validated_data
            )
        except (InvalidAmountError, MemberNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except LedgerApplyError:
            return Response(
                {'error': 'Could not record the deposit. Please try again.'},
                status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        output = CashDepositResultSerializer({'deposit': deposit, 'member_balance': balance})
        return Response(output.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: CashDepositSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def cash_deposits(self, request, pk=None):
        """
        Get cash deposit history of the member.

        GET /api/members/{id}/cash_deposits/
        """
        member = self.get_object()
        queryset = list_cash_deposits(member_id=member.id)

        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(CashDepositSerializer(page, many=True).data)
        return Response(CashDepositSerializer(queryset, many=True).data)
