"""
Converter session - the boundary the presentation layer talks to.

Owns the amount field and its undo history, the committed ledger with its
staging buffer, and the reference rate. Every mutation is followed by an
explicit recompute of the conversion.
"""

import logging
from typing import List, Optional

from core.settings import AMOUNT_WORDS_LANG, QUICK_AMOUNTS, REFERENCE_CURRENCY, SOURCE_CURRENCY, TARGET_CURRENCY
from apps.converter.application.dto import (
    ConversionResultDTO,
    ConverterSnapshotDTO,
    TransactionDTO,
)
from apps.converter.application.state import ConverterStateSync
from apps.converter.domain.history import InputHistory
from apps.converter.domain.interfaces import BaseStateStore
from apps.converter.domain.models import TRANSACTION_FIELDS, Ledger, TransactionDraft
from apps.converter.domain.number_text import (
    GROUP_SEPARATOR,
    format_fixed,
    format_number,
    is_digit_edit,
    parse_number,
    plain_text,
    spell_amount,
)
from apps.converter.domain.services import ConversionService, LedgerService

logger = logging.getLogger(__name__)


class LedgerEditor:
    """
    Staging buffer for ledger edits.

    Works on a copy of the committed ledger. `save` replaces the ledger in
    one step; `cancel` throws the copy away. Either one closes the editor.
    """

    def __init__(self, session: "ConverterSession", drafts: List[TransactionDraft]):
        self._session = session
        self.drafts = drafts
        self.is_open = True

    def _ensure_open(self):
        if not self.is_open:
            raise RuntimeError("Ledger editor is closed")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.drafts):
            raise IndexError(f"No transaction row at index {index}")

    def add(self) -> TransactionDraft:
        self._ensure_open()
        draft = TransactionDraft()
        self.drafts.append(draft)
        return draft

    def update(self, index: int, field: str, value: str) -> None:
        self._ensure_open()
        if field not in TRANSACTION_FIELDS:
            raise ValueError(f"Unknown transaction field '{field}'")
        self._check_index(index)
        setattr(self.drafts[index], field, value)

    def remove(self, index: int) -> None:
        self._ensure_open()
        self._check_index(index)
        del self.drafts[index]

    def save(self) -> Ledger:
        self._ensure_open()
        ledger = self._session.commit_ledger(self.drafts)
        self.is_open = False
        return ledger

    def cancel(self) -> None:
        self._ensure_open()
        self.drafts = []
        self.is_open = False


class ConverterSession:
    """
    One user's converter state.

    Example:
        >>> session = ConverterSession.restore(InMemoryStateStore())
        >>> session.set_reference_rate("300")
        >>> editor = session.open_ledger_editor()
        >>> editor.add(); editor.update(0, "rate", "24000"); editor.update(0, "usd_amount", "100")
        >>> editor.save()
        >>> session.add_quick_amount(1000000)
        >>> session.snapshot().conversion.converted_text
        '12,500.00'
    """

    def __init__(self, store: BaseStateStore, quick_amounts: Optional[List[int]] = None):
        self.state = ConverterStateSync(store)
        self.quick_amounts = list(QUICK_AMOUNTS if quick_amounts is None else quick_amounts)
        self.history = InputHistory()
        self.amount_text = ""
        self.reference_rate_text = ""
        self.ledger = Ledger()
        self.converted_amount = 0.0
        self._editor: Optional[LedgerEditor] = None

    @classmethod
    def restore(cls, store: BaseStateStore, **kwargs) -> "ConverterSession":
        """Create a session with the reference rate and ledger loaded from the store."""
        session = cls(store, **kwargs)
        session.reference_rate_text = session.state.load_reference_rate()
        session.ledger = session.state.load_ledger()
        session.recompute()
        logger.debug(
            "Restored session: reference rate %r, %d transactions",
            session.reference_rate_text,
            len(session.ledger),
        )
        return session

    # Derived values

    @property
    def amount(self) -> float:
        return parse_number(self.amount_text)

    @property
    def reference_rate(self) -> float:
        return parse_number(self.reference_rate_text)

    @property
    def average_rate(self) -> float:
        return LedgerService.average_rate(self.ledger)

    @property
    def advisory(self) -> Optional[str]:
        return ConversionService.advisory(self.reference_rate, self.ledger)

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    def recompute(self) -> float:
        self.converted_amount = ConversionService.convert(self.amount, self.ledger, self.reference_rate)
        return self.converted_amount

    # Amount field

    def _set_amount_text(self, text: str) -> None:
        self.history.record(self.amount_text)
        self.amount_text = text
        self.recompute()

    def add_quick_amount(self, amount: int) -> None:
        self._set_amount_text(format_number(self.amount + amount))

    def edit_amount(self, text: str) -> bool:
        """Apply a manual edit. Anything but digits is rejected and changes nothing."""
        if not is_digit_edit(text):
            return False
        self._set_amount_text(format_number(text.replace(GROUP_SEPARATOR, "")))
        return True

    def clear_amount(self) -> None:
        self._set_amount_text("")

    def undo(self) -> bool:
        previous = self.history.undo()
        if previous is None:
            return False
        self.amount_text = previous
        self.recompute()
        return True

    # Reference rate

    def set_reference_rate(self, text: str) -> None:
        self.reference_rate_text = text
        self.state.save_reference_rate(text)
        self.recompute()

    # Ledger

    def open_ledger_editor(self) -> LedgerEditor:
        if self._editor is not None and self._editor.is_open:
            self._editor.cancel()
        drafts = [
            TransactionDraft(rate=plain_text(t.rate), usd_amount=plain_text(t.usd_amount))
            for t in self.ledger
        ]
        self._editor = LedgerEditor(self, drafts)
        return self._editor

    def commit_ledger(self, candidates) -> Ledger:
        """Replace the ledger with the valid candidates, persist it and recompute."""
        candidates = list(candidates)
        self.ledger = LedgerService.commit(candidates)
        self.state.save_ledger(self.ledger)
        self.recompute()

        skipped = len(candidates) - len(self.ledger)
        logger.info(
            "Committed ledger: %d transactions (%d incomplete skipped), average %.2f",
            len(self.ledger),
            skipped,
            self.average_rate,
        )
        return self.ledger

    # Presentation

    def conversion_result(self) -> ConversionResultDTO:
        return ConversionResultDTO(
            source_currency=SOURCE_CURRENCY,
            target_currency=TARGET_CURRENCY,
            amount=self.amount,
            amount_text=self.amount_text,
            average_rate=self.average_rate,
            reference_rate=self.reference_rate,
            converted_amount=self.converted_amount,
            converted_text=format_fixed(self.converted_amount),
            advisory=self.advisory,
            amount_words=spell_amount(self.amount, AMOUNT_WORDS_LANG) if self.amount_text else "",
        )

    def snapshot(self) -> ConverterSnapshotDTO:
        average = self.average_rate
        return ConverterSnapshotDTO(
            reference_rate_text=self.reference_rate_text,
            transactions=[TransactionDTO(rate=t.rate, usd_amount=t.usd_amount) for t in self.ledger],
            average_rate=average,
            average_rate_text=format_fixed(average) if average > 0 else "",
            conversion=self.conversion_result(),
            can_undo=self.can_undo,
            quick_amounts=list(self.quick_amounts),
        )

    def __repr__(self):
        return (
            f"<ConverterSession {SOURCE_CURRENCY}->{REFERENCE_CURRENCY}->{TARGET_CURRENCY} "
            f"amount={self.amount_text!r} result={self.converted_amount:.2f}>"
        )
