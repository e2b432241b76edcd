from django.http import HttpResponse
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiTypes

from .models import Transaction
from .serializers import (
    TransactionSerializer,
    FundSnapshotSerializer,
    MarkReimbursedResponseSerializer,
    PaymentLinkSerializer,
    # Input serializers
    ContributionInputSerializer,
    ReimbursementInputSerializer,
    ResolveTransactionInputSerializer,
    MarkReimbursedInputSerializer,
    TransactionFilterSerializer,
    PaymentLinkQuerySerializer,
)
from .services import (
    submit_contribution,
    submit_reimbursement,
    resolve_transaction,
    mark_reimbursed as record_payout,
    get_room_fund,
    list_room_transactions,
    list_pending_transactions,
    get_room_transaction,
    get_payment_link,
    UPIPaymentLinkGenerator,
    LedgerServiceError,
)


def ledger_error_response(error):
    """JSON error body for a ledger service exception."""
    return Response(
        {'error': str(error), 'code': error.code},
        status=error.status_code
    )


class TransactionPagination(PageNumberPagination):
    """Custom pagination for transactions."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class TransactionViewSet(viewsets.GenericViewSet):
    """
    Transactions of one room, nested under /api/rooms/{room_id}/.

    Views only validate input and translate service errors to HTTP; all
    access checks and state changes happen in the ledger services.

    list: Room transactions, newest first (members)
    retrieve: Single transaction (members)
    pending: Transactions awaiting a decision (admin)
    contribute / reimbursement: Submit a new transaction (members)
    resolve: Confirm or reject a pending transaction (admin)
    mark_reimbursed: Record a payout of a confirmed reimbursement (admin)
    payment_link / qr_code: UPI deep link for paying a transaction
    """

    queryset = Transaction.objects.none()
    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TransactionPagination
    lookup_value_regex = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"

    @property
    def room_id(self):
        return self.kwargs['room_id']

    @extend_schema(
        parameters=[
            OpenApiParameter('status', OpenApiTypes.STR, description='PENDING, CONFIRMED or REJECTED'),
            OpenApiParameter('type', OpenApiTypes.STR, description='CONTRIBUTION, REIMBURSEMENT or REIMBURSEMENT_PAYMENT'),
        ],
        responses={200: TransactionSerializer(many=True)},
    )
    def list(self, request, room_id=None):
        """List room transactions, optionally filtered by status and type."""
        filter_serializer = TransactionFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        try:
            queryset = list_room_transactions(
                room_id=self.room_id,
                user=request.user,
                status=params.get('status'),
                type=params.get('type'),
            )
        except LedgerServiceError as e:
            return ledger_error_response(e)

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = TransactionSerializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = TransactionSerializer(queryset, many=True)
        return Response(serializer.data)

    @extend_schema(responses={200: TransactionSerializer})
    def retrieve(self, request, room_id=None, pk=None):
        """Get a single transaction."""
        try:
            tx = get_room_transaction(room_id=self.room_id, transaction_id=pk, user=request.user)
        except LedgerServiceError as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(tx).data)

    @extend_schema(responses={200: TransactionSerializer(many=True)})
    @action(detail=False, methods=['get'])
    def pending(self, request, room_id=None):
        """Transactions awaiting the admin's decision."""
        try:
            queryset = list_pending_transactions(room_id=self.room_id, user=request.user)
        except LedgerServiceError as e:
            return ledger_error_response(e)

        serializer = TransactionSerializer(queryset, many=True)
        return Response(serializer.data)

    @extend_schema(
        request=ContributionInputSerializer,
        responses={201: TransactionSerializer}
    )
    @action(detail=False, methods=['post'])
    def contribute(self, request, room_id=None):
        """Submit a contribution to the room fund."""
        input_serializer = ContributionInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            tx = submit_contribution(
                room_id=self.room_id,
                user=request.user,
                amount=data['amount'],
                notes=data.get('notes', ''),
            )
        except LedgerServiceError as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(tx).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ReimbursementInputSerializer,
        responses={201: TransactionSerializer}
    )
    @action(detail=False, methods=['post'])
    def reimbursement(self, request, room_id=None):
        """Submit a reimbursement claim."""
        input_serializer = ReimbursementInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        data = input_serializer.validated_data

        try:
            tx = submit_reimbursement(
                room_id=self.room_id,
                user=request.user,
                amount=data['amount'],
                notes=data['notes'],
                merchant_upi_id=data['merchant_upi_id'],
                reference_id=data.get('reference_id', ''),
            )
        except LedgerServiceError as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(tx).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ResolveTransactionInputSerializer,
        responses={200: TransactionSerializer}
    )
    @action(detail=True, methods=['post'])
    def resolve(self, request, room_id=None, pk=None):
        """Confirm or reject a pending transaction (admin only)."""
        input_serializer = ResolveTransactionInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            tx = resolve_transaction(
                room_id=self.room_id,
                transaction_id=pk,
                decision=input_serializer.validated_data['decision'],
                resolved_by=request.user,
            )
        except LedgerServiceError as e:
            return ledger_error_response(e)

        return Response(TransactionSerializer(tx).data)

    @extend_schema(
        request=MarkReimbursedInputSerializer,
        responses={201: MarkReimbursedResponseSerializer}
    )
    @action(detail=True, methods=['post'], url_path='mark-reimbursed')
    def mark_reimbursed(self, request, room_id=None, pk=None):
        """Record that a confirmed reimbursement has been paid out (admin only)."""
        input_serializer = MarkReimbursedInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            original, payment = record_payout(
                room_id=self.room_id,
                transaction_id=pk,
                member_upi_id=input_serializer.validated_data['member_upi_id'],
                paid_by=request.user,
            )
        except LedgerServiceError as e:
            return ledger_error_response(e)

        serializer = MarkReimbursedResponseSerializer({
            'original': original,
            'payment': payment,
        })
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def _payment_link(self, request, pk):
        query_serializer = PaymentLinkQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        return get_payment_link(
            room_id=self.room_id,
            transaction_id=pk,
            user=request.user,
            member_upi_id=query_serializer.validated_data.get('member_upi_id', ''),
        )

    @extend_schema(
        parameters=[OpenApiParameter('member_upi_id', OpenApiTypes.STR, description='Payee for unpaid reimbursements')],
        responses={200: PaymentLinkSerializer}
    )
    @action(detail=True, methods=['get'])
    def payment_link(self, request, room_id=None, pk=None):
        """
        UPI deep link for paying this transaction.

        GET /api/rooms/{room_id}/transactions/{id}/payment_link/
        """
        try:
            link = self._payment_link(request, pk)
        except LedgerServiceError as e:
            return ledger_error_response(e)

        return Response(PaymentLinkSerializer(link).data)

    @extend_schema(
        parameters=[OpenApiParameter('member_upi_id', OpenApiTypes.STR, description='Payee for unpaid reimbursements')],
        responses={(200, 'image/png'): OpenApiTypes.BINARY}
    )
    @action(detail=True, methods=['get'])
    def qr_code(self, request, room_id=None, pk=None):
        """
        PNG QR code of the transaction's UPI deep link.

        GET /api/rooms/{room_id}/transactions/{id}/qr_code/
        """
        try:
            link = self._payment_link(request, pk)
        except LedgerServiceError as e:
            return ledger_error_response(e)

        png = UPIPaymentLinkGenerator.generate_qr_image(link['upi_url'])
        return HttpResponse(png, content_type='image/png')


@extend_schema(
    responses={200: FundSnapshotSerializer},
    description="Current fund totals of a room (computed on first access).",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def room_fund(request, room_id):
    """Get the room's fund snapshot."""
    try:
        snapshot = get_room_fund(room_id=room_id, user=request.user)
    except LedgerServiceError as e:
        return ledger_error_response(e)

    return Response(FundSnapshotSerializer(snapshot).data)
