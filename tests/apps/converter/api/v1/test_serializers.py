from apps.converter.api.v1.serializers import (
    AmountQuerySerializer,
    ConverterSnapshotSerializer,
    ReferenceRateSerializer,
    TransactionSerializer,
)
from apps.converter.application.session import ConverterSession
from apps.converter.infrastructure.stores.memory import InMemoryStateStore


class TestTransactionSerializer:
    """Tests for TransactionSerializer."""

    def test_keeps_raw_text(self):
        """
        Test that malformed numbers are not rejected here.
        """
        serializer = TransactionSerializer(data={"rate": "abc", "usd_amount": ""})

        assert serializer.is_valid()
        assert serializer.validated_data == {"rate": "abc", "usd_amount": ""}

    def test_numbers_become_text(self):
        serializer = TransactionSerializer(data={"rate": 24000, "usd_amount": 10.5})

        assert serializer.is_valid()
        assert serializer.validated_data["rate"] == "24000"
        assert serializer.validated_data["usd_amount"] == "10.5"

    def test_requires_both_fields(self):
        serializer = TransactionSerializer(data={"rate": "24000"})

        assert not serializer.is_valid()
        assert "usd_amount" in serializer.errors


class TestAmountQuerySerializer:
    """Tests for AmountQuerySerializer."""

    def test_digits_and_commas(self):
        serializer = AmountQuerySerializer(data={"amount": "1,000,000"})

        assert serializer.is_valid()
        assert serializer.validated_data["amount"] == "1,000,000"

    def test_default_empty(self):
        serializer = AmountQuerySerializer(data={})

        assert serializer.is_valid()
        assert serializer.validated_data["amount"] == ""

    def test_rejects_non_digits(self):
        serializer = AmountQuerySerializer(data={"amount": "1.5"})

        assert not serializer.is_valid()
        assert "amount" in serializer.errors


def test_reference_rate_allows_blank():
    serializer = ReferenceRateSerializer(data={"reference_rate": ""})

    assert serializer.is_valid()


def test_snapshot_serializer():
    """
    Test that a session snapshot serializes with nested conversion data.
    """
    session = ConverterSession(InMemoryStateStore())
    session.set_reference_rate("300")
    session.add_quick_amount(1000)

    data = ConverterSnapshotSerializer(session.snapshot()).data

    assert data["reference_rate_text"] == "300"
    assert data["can_undo"] is True
    assert data["conversion"]["amount_text"] == "1,000"
    assert data["conversion"]["converted_text"] == "0.00"
    assert data["transactions"] == []
