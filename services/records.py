"""Immutable values stored in and emitted by the payment ledger."""
from dataclasses import dataclass

from .identity import Identity


@dataclass(frozen=True)
class PaymentRecord:
     recipient: Identity
     amount: int
     timestamp: int


@dataclass(frozen=True)
class PaymentRecorded:
     """Notification payload emitted once per accepted record() call."""
     sender: Identity
     recipient: Identity
     amount: int
     timestamp: int

     @property
     def record(self) -> PaymentRecord:
          return PaymentRecord(self.recipient, self.amount, self.timestamp)
