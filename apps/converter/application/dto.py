"""
Data Transfer Objects for the application layer.
DTOs decouple the converter session from the API contract.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TransactionDTO:
    """Committed ledger entry."""
    rate: float
    usd_amount: float


@dataclass
class ConversionResultDTO:
    """Result DTO for a VND -> USD -> LKR conversion."""
    source_currency: str
    target_currency: str
    amount: float
    amount_text: str
    average_rate: float
    reference_rate: float
    converted_amount: float
    converted_text: str
    advisory: Optional[str] = None
    amount_words: str = ""


@dataclass
class ConverterSnapshotDTO:
    """Everything the presentation layer renders for one session."""
    reference_rate_text: str
    transactions: List[TransactionDTO]
    average_rate: float
    average_rate_text: str
    conversion: ConversionResultDTO
    can_undo: bool
    quick_amounts: List[int] = field(default_factory=list)
