"""
Serializers for the converter API.
Input is kept as raw text: malformed numbers are not API errors, they are
handled by the converter's zero/skip policy.
"""

from rest_framework import serializers

from apps.converter.domain.number_text import is_digit_edit


class TransactionSerializer(serializers.Serializer):
    rate = serializers.CharField(allow_blank=True, max_length=32)
    usd_amount = serializers.CharField(allow_blank=True, max_length=32)


class StoredTransactionSerializer(serializers.Serializer):
    rate = serializers.FloatField(read_only=True)
    usd_amount = serializers.FloatField(read_only=True)


class ReferenceRateSerializer(serializers.Serializer):
    reference_rate = serializers.CharField(allow_blank=True, max_length=32)


class AmountQuerySerializer(serializers.Serializer):
    amount = serializers.CharField(allow_blank=True, required=False, default="", max_length=32)

    def validate_amount(self, value: str) -> str:
        if not is_digit_edit(value):
            raise serializers.ValidationError("Amount may only contain digits.")
        return value


class ConversionResultSerializer(serializers.Serializer):
    source_currency = serializers.CharField()
    target_currency = serializers.CharField()
    amount = serializers.FloatField()
    amount_text = serializers.CharField()
    average_rate = serializers.FloatField()
    reference_rate = serializers.FloatField()
    converted_amount = serializers.FloatField()
    converted_text = serializers.CharField()
    advisory = serializers.CharField(allow_null=True)
    amount_words = serializers.CharField()


class ConverterSnapshotSerializer(serializers.Serializer):
    reference_rate_text = serializers.CharField()
    transactions = StoredTransactionSerializer(many=True)
    average_rate = serializers.FloatField()
    average_rate_text = serializers.CharField()
    conversion = ConversionResultSerializer()
    can_undo = serializers.BooleanField()
    quick_amounts = serializers.ListField(child=serializers.IntegerField())


class LedgerSerializer(serializers.Serializer):
    transactions = StoredTransactionSerializer(many=True)
    average_rate = serializers.FloatField()
    average_rate_text = serializers.CharField()
