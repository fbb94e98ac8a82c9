"""
Tests for the Ledger write and read paths.

Uses the in-memory store and a recording sink so every emitted
notification can be asserted on directly.
"""

import logging

import pytest

from services.identity import Identity
from services.ledger_service import MAX_AMOUNT, MAX_TIMESTAMP, CallContext, Ledger
from services.notifications import LoggingSink, RecordingSink
from services.records import PaymentRecord, PaymentRecorded
from services.stores import InMemoryHistoryStore


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def ledger(sink):
    return Ledger(InMemoryHistoryStore(), sink)


def ctx(caller, timestamp=1000):
    return CallContext(caller=caller, timestamp=timestamp)


# ============================================================================
# READ PATH ON AN EMPTY LEDGER
# ============================================================================


def test_new_ledger_has_empty_histories(ledger, alice, bob):
    assert ledger.history_of(alice) == ()
    assert ledger.history_of(bob) == ()
    assert ledger.my_history(ctx(alice)) == ()


# ============================================================================
# WRITE PATH
# ============================================================================


def test_record_appends_under_caller(ledger, alice, bob):
    ledger.record(ctx(alice, 1000), bob, 100)

    assert ledger.history_of(alice) == (PaymentRecord(bob, 100, 1000),)
    assert ledger.my_history(ctx(alice)) == ledger.history_of(alice)


def test_record_keeps_call_order_without_dedup(ledger, alice, bob, charlie):
    calls = [(bob, 100, 1), (charlie, 200, 2), (bob, 100, 2), (bob, 100, 5)]
    for recipient, amount, ts in calls:
        ledger.record(ctx(alice, ts), recipient, amount)

    assert ledger.history_of(alice) == tuple(PaymentRecord(*c) for c in calls)


def test_history_is_keyed_by_sender_not_recipient(ledger, alice, bob):
    ledger.record(ctx(alice), bob, 100)

    assert ledger.history_of(bob) == ()
    assert ledger.my_history(ctx(bob)) == ()


def test_zero_amount_is_accepted(ledger, alice, bob):
    ledger.record(ctx(alice), bob, 0)
    assert ledger.history_of(alice)[0].amount == 0


def test_self_payment_is_recorded(ledger, alice):
    ledger.record(ctx(alice), alice, 7)
    assert ledger.history_of(alice) == (PaymentRecord(alice, 7, 1000),)


def test_max_amount_is_accepted(ledger, alice, bob):
    ledger.record(ctx(alice), bob, MAX_AMOUNT)
    assert ledger.history_of(alice)[0].amount == 2**128 - 1


@pytest.mark.parametrize("amount", [-1, MAX_AMOUNT + 1, 1.5, "10", True])
def test_amount_outside_balance_width_is_rejected(ledger, sink, alice, bob, amount):
    with pytest.raises(ValueError):
        ledger.record(ctx(alice), bob, amount)
    assert ledger.history_of(alice) == ()
    assert sink.events == []


def test_negative_timestamp_is_rejected(ledger, alice, bob):
    with pytest.raises(ValueError):
        ledger.record(ctx(alice, -1), bob, 1)


# ============================================================================
# NOTIFICATIONS
# ============================================================================


def test_each_record_emits_one_matching_notification(ledger, sink, alice, bob, charlie):
    first = ledger.record(ctx(alice, 10), bob, 100)
    second = ledger.record(ctx(bob, 11), charlie, 5)

    assert sink.events == [
        PaymentRecorded(sender=alice, recipient=bob, amount=100, timestamp=10),
        PaymentRecorded(sender=bob, recipient=charlie, amount=5, timestamp=11),
    ]
    assert [first, second] == sink.events
    assert first.record == ledger.history_of(alice)[-1]


class ExplodingStore(InMemoryHistoryStore):
    def save(self, identity, history):
        raise RuntimeError("storage unavailable")


def test_store_failure_propagates_without_notification(sink, alice, bob):
    ledger = Ledger(ExplodingStore(), sink)

    with pytest.raises(RuntimeError, match="storage unavailable"):
        ledger.record(ctx(alice), bob, 100)

    assert sink.events == []
    assert ledger.history_of(alice) == ()


# ============================================================================
# END-TO-END SCENARIO
# ============================================================================


def test_alice_bob_charlie_scenario(ledger, sink, alice, bob, charlie):
    ledger.record(ctx(alice, 1), bob, 100)
    ledger.record(ctx(alice, 2), charlie, 200)

    alice_history = ledger.history_of(alice)
    assert [(r.recipient, r.amount) for r in alice_history] == [(bob, 100), (charlie, 200)]
    assert alice_history[0].timestamp <= alice_history[1].timestamp
    assert ledger.history_of(bob) == ()

    ledger.record(ctx(bob, 3), alice, 50)

    assert ledger.history_of(bob) == (PaymentRecord(alice, 50, 3),)
    assert len(ledger.history_of(alice)) == 2
    assert ledger.history_of(charlie) == ()
    assert len(sink.events) == 3


def test_my_history_matches_history_of_for_every_identity(ledger, alice, bob, charlie):
    ledger.record(ctx(alice), bob, 1)
    ledger.record(ctx(charlie), alice, 2)

    for identity in (alice, bob, charlie, Identity(b"\xff" * 32)):
        assert ledger.my_history(ctx(identity)) == ledger.history_of(identity)


@pytest.mark.parametrize("timestamp", [MAX_TIMESTAMP + 1, 2**64, 1.5])
def test_timestamp_outside_column_width_is_rejected(ledger, sink, alice, bob, timestamp):
    with pytest.raises(ValueError):
        ledger.record(ctx(alice, timestamp), bob, 1)
    assert ledger.history_of(alice) == ()
    assert sink.events == []


def test_max_timestamp_is_accepted(ledger, alice, bob):
    ledger.record(ctx(alice, MAX_TIMESTAMP), bob, 1)
    assert ledger.history_of(alice)[0].timestamp == 2**63 - 1


# ============================================================================
# LOGGING SINK
# ============================================================================


def test_logging_sink_writes_one_line_per_record(caplog, alice, bob):
    ledger = Ledger(InMemoryHistoryStore(), LoggingSink())

    with caplog.at_level(logging.INFO, logger="payments.events"):
        ledger.record(ctx(alice, 1769817600000), bob, 250)

    lines = [r for r in caplog.records if r.name == "payments.events"]
    assert len(lines) == 1
    assert lines[0].levelno == logging.INFO
    message = lines[0].getMessage()
    assert f"sender={alice.hex}" in message
    assert f"recipient={bob.hex}" in message
    assert "amount=250" in message
    assert "timestamp=1769817600000" in message
