"""Cross-check against pyotp, the reference Python implementation."""
import hashlib
from datetime import datetime, timezone

import pyotp
import pytest

from authenticator import get_generator

TIMESTAMPS = [0, 59, 1111111109, 1234567890, 1672531200, 2000000000]


@pytest.mark.parametrize("secret", [
    "JBSWY3DPEHPK3PXP",
    "GEZDGNBVGY3TQOJQGEZDGNBVGY",
    "HXDMVJECJJWSRB3HWIZR4IFUGFTMXBOZ",
])
@pytest.mark.parametrize("algorithm,digest", [
    ("SHA1", hashlib.sha1),
    ("SHA256", hashlib.sha256),
    ("SHA512", hashlib.sha512),
])
@pytest.mark.parametrize("digits,period", [(6, 30), (8, 60)])
def test_matches_pyotp(secret, algorithm, digest, digits, period):
    gen, err = get_generator(
        f"otpauth://totp/x?secret={secret}&algorithm={algorithm}&digits={digits}&period={period}"
    )
    assert err is None
    reference = pyotp.TOTP(secret, digits=digits, digest=digest, interval=period)
    for seconds in TIMESTAMPS:
        assert gen.generate(seconds * 1000) == reference.at(datetime.fromtimestamp(seconds, tz=timezone.utc))


def test_random_pyotp_secret():
    secret = pyotp.random_base32()
    gen, _ = get_generator(secret)
    assert gen.generate(1672531200000) == pyotp.TOTP(secret).at(datetime(2023, 1, 1, tzinfo=timezone.utc))
