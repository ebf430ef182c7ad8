"""
Domain services - Core business logic.
Weighted average of the exchange ledger and the VND -> USD -> LKR conversion.
"""

from typing import Iterable, Optional

from apps.converter.domain.models import Ledger, Transaction, TransactionDraft
from apps.converter.domain.number_text import parse_number

MISSING_REFERENCE_RATE = "Please enter the USD rate first"
EMPTY_LEDGER = "Please add VND transactions to calculate conversions"


class LedgerService:
    """
    Domain service for the exchange ledger.

    A ledger only ever holds valid transactions: candidates are filtered on
    commit and the new ledger replaces the previous one wholesale.
    """

    @staticmethod
    def is_valid(candidate) -> bool:
        """
        Check that both fields of a candidate parse to positive numbers.

        Args:
            candidate: Anything with `rate` and `usd_amount` attributes
                (a TransactionDraft with raw text, or a Transaction)

        Returns:
            True when rate > 0 and usd_amount > 0
        """
        return parse_number(candidate.rate) > 0 and parse_number(candidate.usd_amount) > 0

    @staticmethod
    def commit(candidates: Iterable[TransactionDraft]) -> Ledger:
        """
        Build a new ledger from the valid candidates, keeping their order.

        Example:
            >>> ledger = LedgerService.commit([
            ...     TransactionDraft("23000", "100"),
            ...     TransactionDraft("0", "50"),
            ... ])
            >>> len(ledger)
            1
        """
        return Ledger(tuple(
            Transaction(rate=parse_number(c.rate), usd_amount=parse_number(c.usd_amount))
            for c in candidates
            if LedgerService.is_valid(c)
        ))

    @staticmethod
    def average_rate(ledger: Ledger) -> float:
        """
        Weighted average VND per USD: sum(rate * usd) / sum(usd).

        Returns 0.0 when the ledger is empty, meaning "no rate available".
        """
        total_usd = ledger.total_usd
        if total_usd <= 0:
            return 0.0
        return ledger.total_vnd / total_usd


class ConversionService:

    @staticmethod
    def convert(amount: float, ledger: Ledger, reference_rate: Optional[float]) -> float:
        """
        Convert a VND amount to LKR through USD.

        Args:
            amount: VND amount
            ledger: Committed exchange ledger (VND per USD)
            reference_rate: LKR per USD

        Returns:
            Converted amount, or 0.0 when the conversion is not possible yet
        """
        if amount <= 0 or reference_rate is None or reference_rate <= 0:
            return 0.0

        average = LedgerService.average_rate(ledger)
        if average <= 0:
            return 0.0

        usd_equivalent = amount / average
        return usd_equivalent * reference_rate

    @staticmethod
    def advisory(reference_rate: Optional[float], ledger: Ledger) -> Optional[str]:
        """Say which precondition is missing. The reference rate is reported first."""
        if reference_rate is None or reference_rate <= 0:
            return MISSING_REFERENCE_RATE
        if LedgerService.average_rate(ledger) <= 0:
            return EMPTY_LEDGER
        return None
