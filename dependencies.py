"""
FastAPI dependencies shared by the routers.

The HTTP layer plays the host: it authenticates the caller from a bearer
token, stamps the call with the process clock, and hands the Ledger a
store bound to the request's database session.
"""
import os
import threading

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from dotenv import load_dotenv

from database import get_session
from services.clock import MonotonicClock
from services.identity import Identity, InvalidIdentity
from services.ledger_service import CallContext, Ledger
from services.notifications import LoggingSink, NotificationSink
from services.stores import SqlAlchemyHistoryStore

load_dotenv()
SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = "HS256"

clock = MonotonicClock()
_default_sink = LoggingSink()

# Serializes ledger calls within this process; one call runs to completion
# before the next starts.
call_lock = threading.Lock()


def create_access_token(identity: Identity, **claims) -> str:
     """Issue a token whose subject is the given identity."""
     payload = {"sub": identity.hex, **claims}
     return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1]
     try:
          return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def get_caller(token: dict = Depends(verify_token)) -> Identity:
     """The authenticated identity of the current call (token subject, hex or SS58)."""
     try:
          return Identity.parse(token.get("sub"))
     except InvalidIdentity:
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="Token subject is not a valid identity",
          )


def new_call_context(caller: Identity) -> CallContext:
     """Stamp a call; take call_lock first so timestamps follow call order."""
     return CallContext(caller=caller, timestamp=clock.now())


def get_notification_sink() -> NotificationSink:
     return _default_sink


def get_ledger(
     db: Session = Depends(get_session),
     sink: NotificationSink = Depends(get_notification_sink),
) -> Ledger:
     return Ledger(SqlAlchemyHistoryStore(db), sink)
