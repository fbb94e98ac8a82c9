"""
Pydantic schemas for the payment recorder API.

Identities are accepted as 0x hex or SS58 and returned as 0x hex;
amounts travel as JSON integers and are never coerced from other types.
"""
from typing import List

from pydantic import BaseModel, Field, ConfigDict, StrictInt, field_validator

from services.identity import Identity
from services.ledger_service import MAX_AMOUNT
from services.records import PaymentRecord, PaymentRecorded


EXAMPLE_ALICE = "0xd43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"
EXAMPLE_BOB = "0x8eaf04151687736326c9fea17e25fc5287613693c912909cb226aa4794f26a48"


def _canonical_identity(value: str) -> str:
     # Raises InvalidIdentity (a ValueError), reported by pydantic as 422
     return Identity.parse(value).hex


class PaymentRecordRequest(BaseModel):
     """Request body for POST /api/payments/record."""

     recipient: str = Field(..., description="Identity the payment claims to have gone to (hex or SS58)")
     amount: StrictInt = Field(..., ge=0, description="Claimed amount (unsigned 128-bit, JSON integer only)")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "recipient": EXAMPLE_BOB,
                    "amount": 100,
               }
          }
     )

     @field_validator("recipient")
     @classmethod
     def validate_recipient(cls, v: str) -> str:
          return _canonical_identity(v)

     @field_validator("amount")
     @classmethod
     def validate_amount_width(cls, v: int) -> int:
          if v > MAX_AMOUNT:
               raise ValueError("amount does not fit an unsigned 128-bit balance")
          return v

     @property
     def recipient_identity(self) -> Identity:
          return Identity.from_hex(self.recipient)


class PaymentRecordResponse(BaseModel):
     """One entry of a payment history."""

     recipient: str = Field(..., description="Recipient identity")
     amount: int = Field(..., description="Claimed amount")
     timestamp: int = Field(..., description="Host time of the record call (ms since epoch)")

     @classmethod
     def from_record(cls, record: PaymentRecord) -> "PaymentRecordResponse":
          return cls(
               recipient=record.recipient.hex,
               amount=record.amount,
               timestamp=record.timestamp,
          )


class PaymentRecordedResponse(BaseModel):
     """Response for POST /api/payments/record: the emitted notification payload."""

     sender: str = Field(..., description="Authenticated caller that recorded the payment")
     recipient: str
     amount: int
     timestamp: int

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "sender": EXAMPLE_ALICE,
                    "recipient": EXAMPLE_BOB,
                    "amount": 100,
                    "timestamp": 1769817600000,
               }
          }
     )

     @classmethod
     def from_event(cls, event: PaymentRecorded) -> "PaymentRecordedResponse":
          return cls(
               sender=event.sender.hex,
               recipient=event.recipient.hex,
               amount=event.amount,
               timestamp=event.timestamp,
          )


class PaymentHistoryResponse(BaseModel):
     """Full payment history sent by one identity, in call order."""

     identity: str
     records: List[PaymentRecordResponse] = Field(default_factory=list)
     total: int = 0

     @classmethod
     def build(cls, identity: Identity, history) -> "PaymentHistoryResponse":
          records = [PaymentRecordResponse.from_record(r) for r in history]
          return cls(identity=identity.hex, records=records, total=len(records))
