import json

import pytest

from apps.converter.application.session import ConverterSession
from apps.converter.domain.services import EMPTY_LEDGER, MISSING_REFERENCE_RATE
from apps.converter.infrastructure.stores.memory import InMemoryStateStore


@pytest.fixture
def store():
    return InMemoryStateStore()


@pytest.fixture
def session(store):
    return ConverterSession.restore(store)


@pytest.fixture
def ready_session(store):
    """Session with reference rate 300 and the 24,000/25,000 ledger."""
    store.save("usdRate", "300")
    store.save("vndTransactions", json.dumps([
        {"rate": "24000", "usdAmount": "200"},
        {"rate": "25000", "usdAmount": "100"},
    ]))
    return ConverterSession.restore(store)


class TestAmountField:
    """Tests for amount edits and undo."""

    def test_quick_amount_adds_and_records(self, session):
        """
        Test that adding 500,000 to "1,000,000" gives "1,500,000" and records the old text.
        """
        session.edit_amount("1000000")
        session.add_quick_amount(500000)

        assert session.amount_text == "1,500,000"
        assert session.amount == 1500000
        assert session.history.undo() == "1,000,000"

    def test_quick_amount_on_empty_field(self, session):
        session.add_quick_amount(1000)

        assert session.amount_text == "1,000"
        assert session.can_undo

    def test_edit_amount_formats_digits(self, session):
        assert session.edit_amount("1234567") is True
        assert session.amount_text == "1,234,567"

    def test_edit_amount_accepts_grouped_text(self, session):
        assert session.edit_amount("1,2345") is True
        assert session.amount_text == "12,345"

    @pytest.mark.parametrize("text", ["12a", "1.5", "-3", "abc", "١٢٣٤"])
    def test_edit_amount_rejects_non_digits(self, session, text):
        """
        Test that rejected edits change nothing and record nothing.
        """
        session.edit_amount("1000")

        assert session.edit_amount(text) is False
        assert session.amount_text == "1,000"
        assert len(session.history) == 1

    def test_clear_amount(self, session):
        session.edit_amount("5000")
        session.clear_amount()

        assert session.amount_text == ""
        assert session.history.undo() == "5,000"

    def test_undo_sequence(self, session):
        """
        Test that undo walks back through every recorded text and then stops.
        """
        session.add_quick_amount(1000)
        session.add_quick_amount(500)

        assert session.undo() is True
        assert session.amount_text == "1,000"
        assert session.undo() is True
        assert session.amount_text == ""
        assert session.undo() is False
        assert session.amount_text == ""
        assert not session.can_undo

    def test_history_not_persisted(self, store, session):
        session.add_quick_amount(1000)

        restored = ConverterSession.restore(store)

        assert restored.amount_text == ""
        assert not restored.can_undo


class TestConversion:
    """Tests for recomputation after every change."""

    def test_end_to_end(self, ready_session):
        """
        Test 1,000,000 VND with average 24,333.33 and 300 LKR/USD gives about 12,328.77.
        """
        ready_session.edit_amount("1,000,000")

        assert ready_session.average_rate == pytest.approx(24333.3333, rel=1e-8)
        assert ready_session.converted_amount == pytest.approx(12328.767, rel=1e-6)
        assert ready_session.snapshot().conversion.converted_text == "12,328.77"

    def test_recomputes_on_reference_rate_change(self, ready_session):
        ready_session.edit_amount("1000000")
        before = ready_session.converted_amount

        ready_session.set_reference_rate("600")

        assert ready_session.converted_amount == pytest.approx(before * 2)

    def test_recomputes_on_undo(self, ready_session):
        ready_session.edit_amount("1000000")
        ready_session.clear_amount()
        assert ready_session.converted_amount == 0.0

        ready_session.undo()

        assert ready_session.converted_amount > 0

    def test_recomputes_on_ledger_commit(self, ready_session):
        ready_session.edit_amount("2430000")
        editor = ready_session.open_ledger_editor()
        editor.remove(1)
        editor.update(0, "rate", "24300")
        editor.save()

        assert ready_session.average_rate == pytest.approx(24300)
        assert ready_session.converted_amount == pytest.approx(30000)

    def test_recompute_is_idempotent(self, ready_session):
        ready_session.edit_amount("1000000")
        first = ready_session.recompute()

        assert ready_session.recompute() == first

    def test_zero_without_reference_rate(self, store):
        session = ConverterSession.restore(store)
        session.edit_amount("1000000")

        assert session.converted_amount == 0.0
        assert session.advisory == MISSING_REFERENCE_RATE

    def test_zero_without_ledger(self, session):
        session.set_reference_rate("300")
        session.edit_amount("1000000")

        assert session.converted_amount == 0.0
        assert session.advisory == EMPTY_LEDGER

    def test_advisory_cleared_when_ready(self, ready_session):
        assert ready_session.advisory is None


class TestLedgerEditor:
    """Tests for the staging buffer."""

    def test_editor_starts_from_committed_ledger(self, ready_session):
        editor = ready_session.open_ledger_editor()

        assert [(d.rate, d.usd_amount) for d in editor.drafts] == [("24000", "200"), ("25000", "100")]

    def test_edits_do_not_touch_ledger_until_saved(self, ready_session):
        editor = ready_session.open_ledger_editor()
        editor.remove(0)
        editor.add()

        assert len(ready_session.ledger) == 2

    def test_cancel_discards_changes(self, store, ready_session):
        stored = store.load("vndTransactions")
        editor = ready_session.open_ledger_editor()
        editor.remove(0)
        editor.cancel()

        assert len(ready_session.ledger) == 2
        assert store.load("vndTransactions") == stored
        assert not editor.is_open

    def test_save_skips_incomplete_rows(self, store, session):
        """
        Test that rows without a positive rate and amount are not committed.
        """
        editor = session.open_ledger_editor()
        editor.add()
        editor.update(0, "rate", "23000")
        editor.update(0, "usd_amount", "100")
        editor.add()
        editor.update(1, "rate", "0")
        editor.update(1, "usd_amount", "50")
        editor.add()

        ledger = editor.save()

        assert len(ledger) == 1
        assert session.ledger is ledger
        assert json.loads(store.load("vndTransactions")) == [{"rate": "23000", "usdAmount": "100"}]

    def test_save_replaces_instead_of_merging(self, ready_session):
        editor = ready_session.open_ledger_editor()
        editor.remove(1)
        editor.remove(0)
        editor.add()
        editor.update(0, "rate", "26000")
        editor.update(0, "usd_amount", "10")
        editor.save()

        assert [t.rate for t in ready_session.ledger] == [26000.0]

    def test_closed_editor_refuses_changes(self, session):
        editor = session.open_ledger_editor()
        editor.save()

        with pytest.raises(RuntimeError):
            editor.add()
        with pytest.raises(RuntimeError):
            editor.save()

    def test_unknown_field(self, session):
        editor = session.open_ledger_editor()
        editor.add()

        with pytest.raises(ValueError):
            editor.update(0, "vnd_amount", "1")

    def test_bad_index(self, session):
        editor = session.open_ledger_editor()

        with pytest.raises(IndexError):
            editor.update(0, "rate", "1")

    def test_negative_index(self, ready_session):
        """
        Test that negative indexes are refused instead of counting from the end.
        """
        editor = ready_session.open_ledger_editor()

        with pytest.raises(IndexError):
            editor.remove(-1)
        with pytest.raises(IndexError):
            editor.update(-1, "rate", "1")

        assert len(editor.drafts) == 2

    def test_reopening_closes_previous_editor(self, session):
        first = session.open_ledger_editor()
        second = session.open_ledger_editor()

        assert not first.is_open
        assert second.is_open


class TestPersistence:
    """Tests for state restore and save."""

    def test_reference_rate_saved_on_every_edit(self, store, session):
        session.set_reference_rate("3")
        assert store.load("usdRate") == "3"

        session.set_reference_rate("30")
        assert store.load("usdRate") == "30"

    def test_restore(self, ready_session):
        assert ready_session.reference_rate_text == "300"
        assert ready_session.reference_rate == 300.0
        assert len(ready_session.ledger) == 2

    def test_restore_deeply_nested_ledger_is_empty(self, store):
        store.save("vndTransactions", "[" * 100000 + "]" * 100000)

        session = ConverterSession.restore(store)

        assert session.ledger.is_empty

    def test_restore_corrupt_ledger_is_empty(self, store):
        store.save("vndTransactions", "{not json")

        session = ConverterSession.restore(store)

        assert session.ledger.is_empty
        assert session.average_rate == 0.0


class TestSnapshot:
    """Tests for the presentation snapshot."""

    def test_snapshot_fields(self, ready_session):
        ready_session.add_quick_amount(1000000)

        snapshot = ready_session.snapshot()

        assert snapshot.reference_rate_text == "300"
        assert snapshot.average_rate_text == "24,333.33"
        assert len(snapshot.transactions) == 2
        assert snapshot.transactions[0].rate == 24000.0
        assert snapshot.can_undo is True
        assert snapshot.conversion.amount_text == "1,000,000"
        assert snapshot.conversion.source_currency == "VND"
        assert snapshot.conversion.target_currency == "LKR"
        assert snapshot.quick_amounts[0] == 1000000
        assert snapshot.quick_amounts[-1] == 100

    def test_snapshot_without_rates(self, session):
        snapshot = session.snapshot()

        assert snapshot.average_rate_text == ""
        assert snapshot.conversion.converted_text == "0.00"
        assert snapshot.conversion.advisory == MISSING_REFERENCE_RATE
        assert snapshot.can_undo is False

    def test_amount_in_words(self, session):
        session.add_quick_amount(1000000)

        assert session.snapshot().conversion.amount_words == "one million"

    def test_no_words_for_empty_amount(self, session):
        """
        Test that an empty field is not spelled out as "zero".
        """
        assert session.snapshot().conversion.amount_words == ""

        session.edit_amount("0")

        assert session.snapshot().conversion.amount_words == "zero"

    def test_custom_quick_amounts(self, store):
        session = ConverterSession(store, quick_amounts=[10, 20])

        assert session.snapshot().quick_amounts == [10, 20]
