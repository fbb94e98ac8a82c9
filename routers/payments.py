"""
Payment recorder API.

POST /api/payments/record: record a payment the caller claims to have made.
GET  /api/payments/history/me: the caller's own history.
GET  /api/payments/history/{identity}: any identity's history (no auth).

Does NOT move funds; assumes the transfer happened through the wallet and
only stores the claim under the authenticated caller.
"""
from fastapi import APIRouter, Depends, HTTPException, Path, status

from dependencies import call_lock, get_caller, get_ledger, new_call_context
from schemas.payment import (
     PaymentHistoryResponse,
     PaymentRecordRequest,
     PaymentRecordedResponse,
)
from services.identity import Identity, InvalidIdentity
from services.ledger_service import Ledger
from services.stores import AppendOnlyViolation

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
     "/record",
     response_model=PaymentRecordedResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record payment",
)
def record_payment(
     body: PaymentRecordRequest,
     caller: Identity = Depends(get_caller),
     ledger: Ledger = Depends(get_ledger),
):
     """
     Append a payment record to the caller's history.

     The sender is always the token subject; it cannot be supplied in the body.
     Returns the PaymentRecorded notification that was emitted.
     """
     with call_lock:
          ctx = new_call_context(caller)
          try:
               event = ledger.record(ctx, body.recipient_identity, body.amount)
          except AppendOnlyViolation as e:
               raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
     return PaymentRecordedResponse.from_event(event)


@router.get(
     "/history/me",
     response_model=PaymentHistoryResponse,
     summary="Get my payment history",
)
def get_my_payment_history(
     caller: Identity = Depends(get_caller),
     ledger: Ledger = Depends(get_ledger),
):
     with call_lock:
          history = ledger.my_history(new_call_context(caller))
     return PaymentHistoryResponse.build(caller, history)


@router.get(
     "/history/{identity}",
     response_model=PaymentHistoryResponse,
     summary="Get payment history of an identity",
)
def get_payment_history(
     identity: str = Path(..., description="0x hex or SS58 identity"),
     ledger: Ledger = Depends(get_ledger),
):
     """Records sent by the identity, in call order. Unknown identities return an empty list."""
     try:
          owner = Identity.parse(identity)
     except InvalidIdentity as e:
          raise HTTPException(status_code=422, detail=str(e))
     with call_lock:
          history = ledger.history_of(owner)
     return PaymentHistoryResponse.build(owner, history)
