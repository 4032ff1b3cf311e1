"""Exceptions raised while parsing authenticator keys and generating codes."""
from typing import Optional


class OtpError(Exception):
    """Base class for every authenticator error."""


class ParseError(OtpError):
    """The key text is not a usable otpauth URI / steam key.

    ``reason`` names the offending part (e.g. ``"secret"``) when known.
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(message)
        self.reason = reason


class UnsupportedAlgorithmError(ParseError):
    """``algorithm`` parameter is not SHA1 / SHA256 / SHA512."""

    def __init__(self, algorithm: str):
        super().__init__(f"Unsupported algorithm: {algorithm}", reason="algorithm")
        self.algorithm = algorithm


class ConfigurationError(ParseError):
    """``digits`` or ``period`` outside the accepted range."""

    def __init__(self, message: str, field: str):
        super().__init__(message, reason=field)
        self.field = field


class SecretDecodeError(OtpError):
    """The Base32 secret cannot be decoded. Raised from ``generate()`` only."""
