"""
Identity - opaque account identifier for ledger participants.

An identity is the 32 raw bytes of an account public key. Two identities
are equal iff their bytes are equal. This system never creates accounts;
identities arrive from the host (token subject) or from request bodies.

Text forms: 0x-prefixed hex (canonical) and SS58 addresses as used by
Polkadot wallets.
"""
from dataclasses import dataclass

from scalecodec.utils.ss58 import ss58_decode, ss58_encode


IDENTITY_LENGTH = 32

# Generic Substrate prefix
DEFAULT_SS58_FORMAT = 42


class InvalidIdentity(ValueError):
     """Raised when a value cannot be interpreted as an identity."""


@dataclass(frozen=True)
class Identity:
     raw: bytes

     def __post_init__(self):
          if not isinstance(self.raw, (bytes, bytearray)):
               raise InvalidIdentity(f"Identity must be bytes, got {type(self.raw).__name__}")
          if len(self.raw) != IDENTITY_LENGTH:
               raise InvalidIdentity(
                    f"Identity must be {IDENTITY_LENGTH} bytes, got {len(self.raw)}"
               )
          # Normalize bytearray so hashing works
          object.__setattr__(self, "raw", bytes(self.raw))

     @classmethod
     def from_hex(cls, text: str) -> "Identity":
          """Parse 64 hex digits, optionally prefixed with 0x."""
          if not isinstance(text, str):
               raise InvalidIdentity("Identity hex must be a string")
          digits = text[2:] if text[:2].lower() == "0x" else text
          if len(digits) != IDENTITY_LENGTH * 2:
               raise InvalidIdentity(f"Expected {IDENTITY_LENGTH * 2} hex digits, got {len(digits)}")
          try:
               return cls(bytes.fromhex(digits))
          except ValueError:
               raise InvalidIdentity(f"Not a hex identity: {text!r}") from None

     @classmethod
     def from_ss58(cls, address: str) -> "Identity":
          """Decode an SS58 address of any network prefix; the checksum must match."""
          if not isinstance(address, str) or not address or address.startswith("0x"):
               raise InvalidIdentity(f"Not an SS58 address: {address!r}")
          try:
               public_key = ss58_decode(address)
          except ValueError as e:
               raise InvalidIdentity(f"Not an SS58 address: {address!r} ({e})") from None
          return cls(bytes.fromhex(public_key))

     @classmethod
     def parse(cls, text: str) -> "Identity":
          """Accept either text form: 0x hex, bare 64-digit hex, or SS58."""
          if isinstance(text, str) and (text[:2].lower() == "0x" or len(text) == IDENTITY_LENGTH * 2):
               return cls.from_hex(text)
          return cls.from_ss58(text)

     @property
     def hex(self) -> str:
          return "0x" + self.raw.hex()

     def ss58(self, ss58_format: int = DEFAULT_SS58_FORMAT) -> str:
          return ss58_encode(self.raw, ss58_format=ss58_format)

     def __str__(self):
          return self.hex

     def __repr__(self):
          return f"<Identity({self.hex[:10]}...)>"
