from .identity import Identity, InvalidIdentity, IDENTITY_LENGTH, DEFAULT_SS58_FORMAT
from .records import PaymentRecord, PaymentRecorded
from .stores import (
     AppendOnlyViolation,
     HistoryStore,
     InMemoryHistoryStore,
     SqlAlchemyHistoryStore,
)
from .notifications import NotificationSink, RecordingSink, LoggingSink
from .clock import MonotonicClock
from .ledger_service import CallContext, Ledger, MAX_AMOUNT, MAX_TIMESTAMP

__all__ = [
     "Identity",
     "InvalidIdentity",
     "IDENTITY_LENGTH",
     "DEFAULT_SS58_FORMAT",
     "PaymentRecord",
     "PaymentRecorded",
     "AppendOnlyViolation",
     "HistoryStore",
     "InMemoryHistoryStore",
     "SqlAlchemyHistoryStore",
     "NotificationSink",
     "RecordingSink",
     "LoggingSink",
     "MonotonicClock",
     "CallContext",
     "Ledger",
     "MAX_AMOUNT",
     "MAX_TIMESTAMP",
]
