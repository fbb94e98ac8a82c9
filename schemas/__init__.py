from .payment import (
     PaymentRecordRequest,
     PaymentRecordResponse,
     PaymentRecordedResponse,
     PaymentHistoryResponse,
)

__all__ = [
     "PaymentRecordRequest",
     "PaymentRecordResponse",
     "PaymentRecordedResponse",
     "PaymentHistoryResponse",
]
