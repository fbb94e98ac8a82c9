"""
Notification sinks for PaymentRecorded events.

The ledger hands each event to exactly one sink after the history write
has returned. Sinks never feed anything back into the ledger.
"""
import logging
from typing import List, Protocol

from .records import PaymentRecorded


event_logger = logging.getLogger("payments.events")


class NotificationSink(Protocol):
     def emit(self, event: PaymentRecorded) -> None:
          ...


class RecordingSink:
     """Keeps emitted events in call order."""

     def __init__(self):
          self.events: List[PaymentRecorded] = []

     def emit(self, event: PaymentRecorded) -> None:
          self.events.append(event)


class LoggingSink:
     """Publishes events to the payments.events logger for external observers."""

     def emit(self, event: PaymentRecorded) -> None:
          event_logger.info(
               "PaymentRecorded sender=%s recipient=%s amount=%d timestamp=%d",
               event.sender.hex,
               event.recipient.hex,
               event.amount,
               event.timestamp,
          )
