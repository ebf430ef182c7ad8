"""
Persisted converter state.
Reads and writes the reference rate and the ledger through a state store.
"""

import json
import logging

from core.settings import LEDGER_STORAGE_KEY, REFERENCE_RATE_STORAGE_KEY
from apps.converter.domain.interfaces import BaseStateStore
from apps.converter.domain.models import Ledger, TransactionDraft
from apps.converter.domain.number_text import plain_text
from apps.converter.domain.services import LedgerService

logger = logging.getLogger(__name__)


def ledger_to_json(ledger: Ledger) -> str:
    """Serialize as a JSON array of {"rate": str, "usdAmount": str}."""
    return json.dumps([
        {"rate": plain_text(t.rate), "usdAmount": plain_text(t.usd_amount)}
        for t in ledger
    ])


def ledger_from_json(raw: str | None) -> Ledger:
    """
    Rebuild a ledger from its stored JSON.

    Corrupt data is treated as "no ledger": anything that is not a JSON
    array gives an empty ledger, and entries that are not valid
    transactions are dropped. Nothing is raised.
    """
    if not raw:
        return Ledger()

    try:
        payload = json.loads(raw)
    except (ValueError, RecursionError) as e:
        logger.warning("Stored ledger is not valid JSON, ignoring it: %s", e)
        return Ledger()

    if not isinstance(payload, list):
        logger.warning("Stored ledger is not a list (got %s), ignoring it", type(payload).__name__)
        return Ledger()

    drafts = [
        TransactionDraft(rate=str(item.get("rate", "")), usd_amount=str(item.get("usdAmount", "")))
        for item in payload
        if isinstance(item, dict)
    ]
    ledger = LedgerService.commit(drafts)

    dropped = len(payload) - len(ledger)
    if dropped:
        logger.warning("Dropped %d invalid entries from the stored ledger", dropped)

    return ledger


class ConverterStateSync:
    """Load and save the session's persistent state under fixed keys."""

    def __init__(
        self,
        store: BaseStateStore,
        reference_rate_key: str = REFERENCE_RATE_STORAGE_KEY,
        ledger_key: str = LEDGER_STORAGE_KEY,
    ):
        self.store = store
        self.reference_rate_key = reference_rate_key
        self.ledger_key = ledger_key

    def load_reference_rate(self) -> str:
        return self.store.load(self.reference_rate_key) or ""

    def save_reference_rate(self, text: str) -> None:
        self.store.save(self.reference_rate_key, text)

    def load_ledger(self) -> Ledger:
        return ledger_from_json(self.store.load(self.ledger_key))

    def save_ledger(self, ledger: Ledger) -> None:
        self.store.save(self.ledger_key, ledger_to_json(ledger))
