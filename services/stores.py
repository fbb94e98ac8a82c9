"""
History stores - the persistent key/value layer behind the Ledger.

A store maps an Identity to the tuple of PaymentRecords it has sent.
Unknown identities load as an empty tuple; callers cannot tell "never
written" from "empty". Saving is append-only: the saved history must
extend what is already stored.
"""
from typing import Dict, Protocol, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import PaymentRecordRow

from .identity import Identity
from .records import PaymentRecord


History = Tuple[PaymentRecord, ...]


class AppendOnlyViolation(ValueError):
     """Raised when a save would drop, rewrite or race an existing record."""


class HistoryStore(Protocol):
     def load(self, identity: Identity) -> History:
          ...

     def save(self, identity: Identity, history: History) -> None:
          ...


def _check_extends(identity: Identity, stored: History, history: History) -> None:
     if len(history) < len(stored) or tuple(history[:len(stored)]) != stored:
          raise AppendOnlyViolation(
               f"History for {identity.hex} does not extend the {len(stored)} stored record(s)"
          )


class InMemoryHistoryStore:
     """Dict-backed store for tests and embedded use."""

     def __init__(self):
          self._histories: Dict[Identity, History] = {}

     def load(self, identity: Identity) -> History:
          return self._histories.get(identity, ())

     def save(self, identity: Identity, history: History) -> None:
          history = tuple(history)
          _check_extends(identity, self.load(identity), history)
          self._histories[identity] = history

     def __len__(self):
          return len(self._histories)


class SqlAlchemyHistoryStore:
     """
     Store backed by the payment_records table.

     save() inserts only the records past the stored length and commits,
     so the write is durable once it returns. On any error the session is
     rolled back and the error propagates.
     """

     def __init__(self, db: Session):
          self.db = db

     def _rows(self, identity: Identity):
          return (
               self.db.query(PaymentRecordRow)
               .filter(PaymentRecordRow.sender == identity.raw)
               .order_by(PaymentRecordRow.position)
               .all()
          )

     def load(self, identity: Identity) -> History:
          return tuple(
               PaymentRecord(
                    recipient=Identity(row.recipient),
                    amount=row.amount,
                    timestamp=row.timestamp,
               )
               for row in self._rows(identity)
          )

     def save(self, identity: Identity, history: History) -> None:
          history = tuple(history)
          stored = self.load(identity)
          _check_extends(identity, stored, history)

          for position in range(len(stored), len(history)):
               record = history[position]
               self.db.add(PaymentRecordRow(
                    sender=identity.raw,
                    position=position,
                    recipient=record.recipient.raw,
                    amount=record.amount,
                    timestamp=record.timestamp,
               ))
          try:
               self.db.commit()
          except IntegrityError as e:
               # Another writer claimed the same (sender, position) slot
               self.db.rollback()
               raise AppendOnlyViolation(
                    f"Concurrent write to history of {identity.hex}"
               ) from e
          except Exception:
               self.db.rollback()
               raise
