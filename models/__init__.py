from .base import Base
from .payment_record import PaymentRecordRow, UInt128

__all__ = [
     "Base",
     "PaymentRecordRow",
     "UInt128",
]
