"""
PaymentRecordRow model - one persisted entry of a sender's payment history.

Rows are grouped by sender and ordered by position (0-based call order).
The (sender, position) pair is unique, so a slot in a history can only
ever be written once. Rows are append-only; nothing updates or deletes them.
"""
from sqlalchemy import (
     BigInteger,
     Column,
     DateTime,
     Integer,
     LargeBinary,
     String,
     UniqueConstraint,
     func,
)
from sqlalchemy.types import TypeDecorator

from .base import Base


AMOUNT_DIGITS = 39  # len(str(2**128 - 1))


class UInt128(TypeDecorator):
     """
     Unsigned 128-bit integer stored as zero-padded decimal text.

     Numeric columns lose precision on SQLite, and the padding keeps
     string ordering equal to numeric ordering.
     """
     impl = String(AMOUNT_DIGITS)
     cache_ok = True

     def process_bind_param(self, value, dialect):
          if value is None:
               return None
          return str(int(value)).zfill(AMOUNT_DIGITS)

     def process_result_value(self, value, dialect):
          if value is None:
               return None
          return int(value)


class PaymentRecordRow(Base):
     id = Column(Integer, primary_key=True, autoincrement=True)
     sender = Column(LargeBinary(32), nullable=False, index=True)
     position = Column(Integer, nullable=False)
     recipient = Column(LargeBinary(32), nullable=False)
     amount = Column(UInt128(), nullable=False)
     timestamp = Column(BigInteger, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     __table_args__ = (
          UniqueConstraint("sender", "position", name="uq_payment_records_sender_position"),
     )

     def __repr__(self):
          return (
               f"<PaymentRecordRow(sender={self.sender.hex()[:16]}..., "
               f"position={self.position}, amount={self.amount})>"
          )
