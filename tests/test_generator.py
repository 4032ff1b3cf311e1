import pytest

from authenticator import (
    Generator,
    OtpConfig,
    ParseError,
    SecretDecodeError,
    Variant,
    get_generator,
)
from authenticator import otp_core

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
RFC_EPOCH_59_MS = 59 * 1000
TEST_TIMESTAMP_MS = 1672531200000  # 2023-01-01 00:00:00 UTC


def _generator(key):
    gen, err = get_generator(key)
    assert err is None
    return gen


def test_rfc6238_vector_8_digits():
    gen = _generator(f"otpauth://totp/Test?secret={RFC_SECRET}&digits=8")
    assert gen.generate(RFC_EPOCH_59_MS) == "94287082"


@pytest.mark.parametrize("secret,algorithm,code", [
    ("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZA====", "SHA256", "46119246"),
    (
        "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
        "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQGEZDGNA=",
        "SHA512",
        "90693936",
    ),
])
def test_rfc6238_vectors_sha2(secret, algorithm, code):
    gen = _generator(f"otpauth://totp/Test?secret={secret}&digits=8&algorithm={algorithm}")
    assert gen.generate(RFC_EPOCH_59_MS) == code


def test_truncated_rfc_secret():
    # 26 characters only decode to the first 16 key bytes, so the code
    # differs from the published 20-byte vector
    gen = _generator("otpauth://totp/Test?secret=GEZDGNBVGY3TQOJQGEZDGNBVGY&digits=8")
    code = gen.generate(RFC_EPOCH_59_MS)
    assert code == "23970934"
    assert code.isdigit() and len(code) == 8


def test_remaining_milliseconds():
    gen = _generator(RFC_SECRET)
    assert gen.period == 30
    assert gen.remaining(RFC_EPOCH_59_MS) == 1000
    assert gen.remaining(60000) == 30000


def test_custom_period():
    gen = _generator(f"otpauth://totp/Test?secret={RFC_SECRET}&period=60&digits=8")
    assert gen.period == 60
    # 59s and 119s fall into windows 0 and 1 of a 60s period
    assert gen.generate(59000) == otp_core.hotp(b"12345678901234567890", 0, 8)
    assert gen.generate(119000) == otp_core.hotp(b"12345678901234567890", 1, 8)
    assert gen.remaining(61000) == 59000


def test_same_window_same_code():
    gen = _generator(RFC_SECRET)
    start = 30000 * 1000
    code = gen.generate(start)
    for offset in (1, 999, 15000, 29999):
        assert gen.generate(start + offset) == code


def test_adjacent_windows_differ():
    gen = _generator(RFC_SECRET)
    assert gen.generate(RFC_EPOCH_59_MS) != gen.generate(RFC_EPOCH_59_MS + 30000)


def test_short_secret_generates_six_digits():
    gen = _generator("otpauth://totp/ACME:user@example.com?secret=JBSWY3DPEHPK3PXP&issuer=ACME&period=30")
    code = gen.generate()
    assert len(code) == 6 and code.isdigit()
    assert gen.generate(TEST_TIMESTAMP_MS) == "082136"


def test_bare_secret():
    gen = _generator("JBSWY3DPEHPK3PXP")
    assert gen.generate(TEST_TIMESTAMP_MS) == "082136"


def test_wall_clock_is_used_when_timestamp_omitted(monkeypatch):
    monkeypatch.setattr(otp_core, "now_ms", lambda: RFC_EPOCH_59_MS)
    gen = _generator(f"otpauth://totp/Test?secret={RFC_SECRET}&digits=8")
    assert gen.generate() == "94287082"
    assert gen.remaining() == 1000


def test_invalid_secret_fails_lazily():
    gen = _generator("otpauth://totp/x?secret=invalid!!!")
    assert isinstance(gen, Generator)
    with pytest.raises(SecretDecodeError):
        gen.generate(TEST_TIMESTAMP_MS)
    # remaining() does not need the secret
    assert gen.remaining(TEST_TIMESTAMP_MS) == 30000


def test_empty_bare_secret_fails_lazily():
    gen = _generator("")
    with pytest.raises(SecretDecodeError):
        gen.generate(TEST_TIMESTAMP_MS)


def test_parse_failures_are_returned():
    gen, err = get_generator("otpauth://hotp/ACME:user?secret=JBSWY3DPEHPK3PXP&issuer=ACME&counter=0")
    assert gen is None
    assert isinstance(err, ParseError)
    assert str(err) == "Invalid authenticator key"


def test_malformed_uri_error_mentions_parse(caplog):
    gen, err = get_generator("otpauth://totp/invalid")
    assert gen is None
    assert "parse" in str(err)
    assert "Failed to parse authenticator key" in caplog.text


def test_verify_accepts_neighbouring_windows():
    gen = _generator(RFC_SECRET)
    now = 1111111109 * 1000
    previous = gen.generate(now - 30000)
    assert gen.verify(gen.generate(now), now)
    assert gen.verify(previous, now, window=1)
    assert not gen.verify(previous, now, window=0)
    assert not gen.verify("12345", now)
    assert not gen.verify("０８１８０４", now)


def test_verify_skips_negative_counters():
    gen = _generator(RFC_SECRET)
    assert gen.verify(gen.generate(0), 0, window=2)


def test_verify_skips_counters_past_64_bits():
    gen = Generator(OtpConfig(secret=RFC_SECRET, period=1))
    last = otp_core.MAX_TIMESTAMP_MS
    assert otp_core.totp_counter(last, 1) == otp_core.MAX_COUNTER
    assert gen.verify(gen.generate(last), last, window=2)
    assert not gen.verify("ABCDEF", last, window=otp_core.MAX_VERIFY_WINDOW)


def test_generator_over_config():
    gen = Generator(OtpConfig(secret=RFC_SECRET, digits=8))
    assert gen.config.variant is Variant.STANDARD
    assert gen.code_at(1) == "94287082"
