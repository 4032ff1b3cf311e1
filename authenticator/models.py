"""Value types shared by the parser, the generator and the API."""
import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from . import base32
from .exceptions import ConfigurationError, UnsupportedAlgorithmError


class Algorithm(str, Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digestmod(self):
        return _DIGESTS[self]

    @classmethod
    def parse(cls, name: Optional[str]) -> "Algorithm":
        """Case-insensitive lookup; empty means SHA1."""
        if not name:
            return cls.SHA1
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise UnsupportedAlgorithmError(name) from None


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}


class Variant(str, Enum):
    STANDARD = "standard"
    STEAM = "steam"


@dataclass(frozen=True)
class OtpConfig:
    """
    Everything needed to produce codes for one authenticator key.

    ``secret`` keeps the Base32 text; it is decoded by ``secret_bytes()``
    when a code is generated, never on construction.
    """

    secret: str
    period: int = 30
    digits: int = 6
    algorithm: Algorithm = Algorithm.SHA1
    variant: Variant = Variant.STANDARD
    issuer: Optional[str] = None
    account: Optional[str] = None

    def __post_init__(self):
        if self.variant is Variant.STEAM:
            # Steam keys carry no parameters of their own
            object.__setattr__(self, "period", 30)
            object.__setattr__(self, "digits", 5)
            object.__setattr__(self, "algorithm", Algorithm.SHA1)
        if isinstance(self.period, bool) or not isinstance(self.period, int) or self.period <= 0:
            raise ConfigurationError(f"Period must be a positive integer, got {self.period!r}", field="period")
        if isinstance(self.digits, bool) or not isinstance(self.digits, int) or not 1 <= self.digits <= 10:
            raise ConfigurationError(f"Digits must be between 1 and 10, got {self.digits!r}", field="digits")

    @classmethod
    def steam(cls, secret: str) -> "OtpConfig":
        return cls(secret=secret, variant=Variant.STEAM)

    def secret_bytes(self) -> bytes:
        """Decode the secret. Raises SecretDecodeError."""
        return base32.decode(self.secret)
