"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

from dataclasses import dataclass, field
from typing import Iterator, Tuple

TRANSACTION_FIELDS = ("rate", "usd_amount")


@dataclass(frozen=True)
class Transaction:
    """
    A real USD -> VND exchange: `usd_amount` dollars changed at `rate` VND per dollar.
    """

    rate: float
    usd_amount: float

    def __post_init__(self):
        if self.rate <= 0:
            raise ValueError(f"rate must be positive, got {self.rate}")
        if self.usd_amount <= 0:
            raise ValueError(f"usd_amount must be positive, got {self.usd_amount}")

    @property
    def vnd_amount(self) -> float:
        return self.rate * self.usd_amount


@dataclass
class TransactionDraft:
    """Editable row of the staging buffer. Holds the text exactly as typed."""

    rate: str = ""
    usd_amount: str = ""


@dataclass(frozen=True)
class Ledger:
    """Committed transactions, in the order they were entered."""

    transactions: Tuple[Transaction, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def __len__(self) -> int:
        return len(self.transactions)

    @property
    def is_empty(self) -> bool:
        return not self.transactions

    @property
    def total_usd(self) -> float:
        return sum(t.usd_amount for t in self.transactions)

    @property
    def total_vnd(self) -> float:
        return sum(t.vnd_amount for t in self.transactions)
