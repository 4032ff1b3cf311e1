#!/usr/bin/env python3
"""
otp_core.py — Core library for HOTP / TOTP / Steam Guard codes.

Pure functions only: no argparse, no I/O, no state. The Generator facade,
the CLI and the Flask API all build on these helpers.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (RFC 4226):
  code = Truncate(HMAC(key=secret, msg=counter)) mod 10^digits
- TOTP (RFC 6238):
  HOTP with counter = floor(timestamp / period), windows aligned to the epoch.
- Steam Guard:
  TOTP counter (30s, SHA1), but the truncated value is rendered as 5
  characters from STEAM_ALPHABET instead of decimal digits.
- Dynamic truncation:
  4 bytes of the digest at offset (last byte & 0x0F), sign bit cleared.
"""

import hmac
import struct
import time

from .models import Algorithm

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # standard: 6 digits
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
MIN_DIGITS = 1
MAX_DIGITS = 10             # 31-bit truncated value has at most 10 decimal digits
STEAM_ALPHABET = "23456789BCDFGHJKMNPQRTVWXY"   # no 0/1/A/E/I/L/O/S/U/Z
STEAM_DIGITS = 5
STEAM_TIME_STEP = 30
MAX_COUNTER = 2 ** 64 - 1
MAX_TIMESTAMP_MS = (MAX_COUNTER + 1) * 1000 - 1   # counter still fits with a 1s period
MAX_VERIFY_WINDOW = 10      # +/- steps accepted from untrusted input


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Convert the counter to the 8-byte big-endian message RFC 4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        ValueError: counter is negative or does not fit in 64 bits
    """
    if i < 0 or i > MAX_COUNTER:
        raise ValueError(f"Counter out of range: {i}")
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Dynamic truncation per RFC 4226 section 5.3.

    - offset = last_byte & 0x0F
    - take 4 bytes from offset, clear the MSB (0x7F) of the first one
    - return the 31-bit unsigned integer

    Works for SHA1/SHA256/SHA512 digests (offset + 4 <= 19 < 20).
    """
    offset = hmac_digest[-1] & 0x0F
    code = (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )
    return code


def truncated_value(key: bytes, counter: int, algorithm: Algorithm = Algorithm.SHA1) -> int:
    """
    HMAC the counter with the raw key and dynamically truncate the digest.

    Arguments:
        key: raw (Base32-decoded) secret
        counter: non-negative 64-bit counter
        algorithm: hash for the HMAC

    Returns:
        int: 31-bit value shared by the decimal and Steam renderings
    """
    digest = hmac.new(key, int_to_bytes(counter), algorithm.digestmod).digest()
    return dynamic_truncate(digest)


def hotp(key: bytes, counter: int, digits: int = DEFAULT_DIGITS,
         algorithm: Algorithm = Algorithm.SHA1) -> str:
    """
    HOTP code per RFC 4226.

    Steps:
    1. Message = 8-byte counter (big-endian)
    2. HMAC(key, message) with the selected hash
    3. Dynamic truncate -> dbc
    4. otp = dbc % 10^digits, zero-padded to "digits" characters

    Arguments:
        key: raw secret bytes
        counter: integer counter (non-negative)
        digits: number of digits (1-10)
        algorithm: SHA1 / SHA256 / SHA512

    Returns:
        str: zero-padded decimal code
    """
    dbc = truncated_value(key, counter, algorithm)
    return str(dbc % (10 ** digits)).zfill(digits)


def steam_encode(value: int, length: int = STEAM_DIGITS) -> str:
    """
    Render a truncated HOTP value with the Steam Guard alphabet.

    Characters are appended in the order they are produced (least
    significant first), not reversed.
    """
    code = ""
    for _ in range(length):
        value, index = divmod(value, len(STEAM_ALPHABET))
        code += STEAM_ALPHABET[index]
    return code


def steam_guard(key: bytes, counter: int) -> str:
    """Steam Guard code for a counter: HMAC-SHA1 + truncation + alphabet."""
    return steam_encode(truncated_value(key, counter, Algorithm.SHA1))


# --- Time helpers ----------------------------------------------------------
def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


def totp_counter(timestamp_ms: int, period: int = DEFAULT_TIME_STEP) -> int:
    """
    TOTP counter: number of whole periods since the Unix epoch.

    counter = floor(timestamp_ms / 1000 / period)
    """
    return int(timestamp_ms) // (period * 1000)


def remaining_ms(timestamp_ms: int, period: int = DEFAULT_TIME_STEP) -> int:
    """
    Milliseconds left in the window containing timestamp_ms.

    Example: remaining_ms(59000, 30) -> 1000
    """
    period_ms = period * 1000
    return period_ms - (int(timestamp_ms) % period_ms)
