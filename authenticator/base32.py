"""
base32.py — Base32 (RFC 4648) decoding for authenticator secrets.

Secrets come from QR codes, password managers and copy/paste, so the decoder
is lenient about formatting but strict about the alphabet:

- case-insensitive ("jbswy3dp" == "JBSWY3DP")
- whitespace anywhere is ignored ("JBSW Y3DP EHPK 3PXP")
- '=' padding is optional
- no minimum length: 16 characters (10 bytes) is a valid secret
"""

import base64
import binascii
import re

from .exceptions import SecretDecodeError

_WHITESPACE = re.compile(r"\s+")
# ASCII only: str.upper() maps some non-ASCII letters onto A-Z
_INVALID_CHAR = re.compile(r"[^A-Za-z2-7]")


def normalize(text: str) -> str:
    """Uppercase, drop whitespace and trailing '=' padding."""
    return _WHITESPACE.sub("", text).rstrip("=").upper()


def decode(text: str) -> bytes:
    """
    Decode a Base32 secret into raw key bytes.

    Arguments:
        text: Base32 secret, padded or not

    Returns:
        bytes: raw HMAC key

    Raises:
        SecretDecodeError: character outside A-Z2-7, impossible length,
            or a secret that decodes to nothing
    """
    stripped = _WHITESPACE.sub("", text).rstrip("=")
    bad = _INVALID_CHAR.search(stripped)
    if bad:
        raise SecretDecodeError(f"Invalid Base32 character: {bad.group()!r}")
    cleaned = stripped.upper()

    # b32decode wants whole 8-character blocks
    missing_padding = len(cleaned) % 8
    if missing_padding:
        cleaned += "=" * (8 - missing_padding)
    try:
        key = base64.b32decode(cleaned)
    except binascii.Error as e:
        raise SecretDecodeError("Invalid Base32 secret length") from e

    if not key:
        raise SecretDecodeError("Secret is empty")
    return key
