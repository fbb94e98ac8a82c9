"""
Payment Ledger Service - identity-keyed, append-only payment history.

A caller claims to have paid a recipient; the ledger stores that claim
under the caller's identity. No funds move here and no claim is checked.

Write path (record):
1. Take the sender and timestamp from the call context (never from arguments)
2. Load the sender's history, or an empty one if none exists
3. Append the new record and write the history back through the store
4. Emit a PaymentRecorded notification once the write has returned

Read path: history_of() for any identity, my_history() for the caller.
Records are never amended, removed or reordered.
"""
import logging
from dataclasses import dataclass

from .identity import Identity
from .notifications import NotificationSink
from .records import PaymentRecord, PaymentRecorded
from .stores import History, HistoryStore


logger = logging.getLogger(__name__)

# Balance is an unsigned 128-bit integer
MAX_AMOUNT = 2**128 - 1
# Timestamps are stored in a signed 64-bit column
MAX_TIMESTAMP = 2**63 - 1


@dataclass(frozen=True)
class CallContext:
     """Who is calling and when, as established by the host for one call."""
     caller: Identity
     timestamp: int


def _check_width(amount: int, timestamp: int) -> None:
     if isinstance(amount, bool) or not isinstance(amount, int):
          raise ValueError(f"Amount must be an integer, got {type(amount).__name__}")
     if not 0 <= amount <= MAX_AMOUNT:
          raise ValueError(f"Amount {amount} does not fit an unsigned 128-bit balance")
     if isinstance(timestamp, bool) or not isinstance(timestamp, int):
          raise ValueError(f"Timestamp must be an integer, got {type(timestamp).__name__}")
     if not 0 <= timestamp <= MAX_TIMESTAMP:
          raise ValueError(f"Timestamp {timestamp} does not fit a signed 64-bit column")


class Ledger:
     """Owns the identity -> history mapping through an injected store."""

     def __init__(self, store: HistoryStore, sink: NotificationSink):
          self.store = store
          self.sink = sink

     def record(self, ctx: CallContext, recipient: Identity, amount: int) -> PaymentRecorded:
          """
          Append a payment claim to the caller's history.

          Args:
               ctx: Call context carrying the authenticated caller and time
               recipient: Who the payment claims to have gone to
               amount: Claimed amount (zero allowed)

          Returns:
               The PaymentRecorded payload that was emitted

          Raises:
               ValueError: If amount or timestamp is outside the integer width
          """
          _check_width(amount, ctx.timestamp)
          sender = ctx.caller
          record = PaymentRecord(recipient=recipient, amount=amount, timestamp=ctx.timestamp)

          history = self.store.load(sender)
          self.store.save(sender, history + (record,))

          event = PaymentRecorded(
               sender=sender,
               recipient=recipient,
               amount=amount,
               timestamp=ctx.timestamp,
          )
          self.sink.emit(event)
          logger.info(
               "Recorded payment #%d for %s -> %s amount=%d",
               len(history) + 1, sender.hex, recipient.hex, amount,
          )
          return event

     def history_of(self, identity: Identity) -> History:
          """All records sent by identity in call order; empty if none."""
          return self.store.load(identity)

     def my_history(self, ctx: CallContext) -> History:
          return self.history_of(ctx.caller)
