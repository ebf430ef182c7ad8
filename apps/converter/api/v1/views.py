"""
ViewSet for the converter API v1.
A local adapter for the front-end: every request restores a ConverterSession
from the configured state store and drives it.
"""

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.converter.api.v1.serializers import (
    AmountQuerySerializer,
    ConversionResultSerializer,
    ConverterSnapshotSerializer,
    LedgerSerializer,
    ReferenceRateSerializer,
    TransactionSerializer,
)
from apps.converter.application.session import ConverterSession
from apps.converter.domain.models import TransactionDraft
from apps.converter.infrastructure.stores.registry import get_state_store


@extend_schema(tags=['Converter'])
class ConverterViewSet(viewsets.ViewSet):

    def get_session(self) -> ConverterSession:
        return ConverterSession.restore(get_state_store())

    def _ledger_response(self, session: ConverterSession) -> Response:
        return Response(LedgerSerializer(session.snapshot()).data)

    @extend_schema(
        responses=ConverterSnapshotSerializer,
        description="Current reference rate, ledger, average rate and advisory"
    )
    def list(self, request):
        session = self.get_session()
        return Response(ConverterSnapshotSerializer(session.snapshot()).data)

    @extend_schema(
        parameters=[
            OpenApiParameter("amount", OpenApiTypes.STR, description="VND amount, digits with optional commas (e.g. 1,000,000)"),
        ],
        responses=ConversionResultSerializer,
        description="Convert a VND amount to LKR through the weighted average USD rate"
    )
    @action(detail=False, methods=['get'], url_path='convert')
    def convert(self, request):
        """
        Convert an amount.

        A zero result is not an error: `advisory` tells which rate is missing.
        """
        query = AmountQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(
                {"error": "Invalid amount. Only digits are allowed", "details": query.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        session = self.get_session()
        session.edit_amount(query.validated_data["amount"])

        return Response(ConversionResultSerializer(session.conversion_result()).data)

    @extend_schema(
        request=ReferenceRateSerializer,
        responses=ConverterSnapshotSerializer,
        description="Set the LKR per USD rate you got from the bank"
    )
    @action(detail=False, methods=['put'], url_path='reference-rate')
    def reference_rate(self, request):
        serializer = ReferenceRateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "reference_rate is required", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        session = self.get_session()
        session.set_reference_rate(serializer.validated_data["reference_rate"])

        return Response(ConverterSnapshotSerializer(session.snapshot()).data)

    @extend_schema(
        methods=['GET'],
        responses=LedgerSerializer,
        description="List the committed VND exchange transactions"
    )
    @extend_schema(
        methods=['PUT'],
        request=TransactionSerializer(many=True),
        responses=LedgerSerializer,
        description="Replace the ledger. Rows without a positive rate and USD amount are skipped."
    )
    @action(detail=False, methods=['get', 'put'], url_path='transactions')
    def transactions(self, request):
        session = self.get_session()

        if request.method == 'PUT':
            serializer = TransactionSerializer(data=request.data, many=True)
            if not serializer.is_valid():
                return Response(
                    {"error": "Expected a list of {rate, usd_amount} objects", "details": serializer.errors},
                    status=status.HTTP_400_BAD_REQUEST
                )

            session.commit_ledger(TransactionDraft(**item) for item in serializer.validated_data)

        return self._ledger_response(session)
