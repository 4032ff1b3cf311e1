"""
generator.py — uniform code generator over standard TOTP and Steam Guard keys.

    gen, err = get_generator("steam://HXDMVJECJJWSRB3HWIZR4IFUGFTMXBOZ")
    if err:
        show_error(err)
    else:
        gen.generate(), gen.remaining()

Parse failures come back as a value so callers can render a failure state
without exception handling. A bad Base32 secret is only detected when
generate() runs.
"""
import hmac
import logging
from typing import Optional, Tuple

from . import otp_core
from .exceptions import OtpError
from .models import OtpConfig, Variant
from .parser import parse_input

logger = logging.getLogger(__name__)


class Generator:
    """Stateless code generator bound to one OtpConfig.

    Timestamps are Unix milliseconds; omit them to use the wall clock.
    """

    def __init__(self, config: OtpConfig):
        self.config = config

    @property
    def period(self) -> int:
        return self.config.period

    def code_at(self, counter: int) -> str:
        """Code for an explicit counter. Raises SecretDecodeError."""
        key = self.config.secret_bytes()
        if self.config.variant is Variant.STEAM:
            return otp_core.steam_guard(key, counter)
        return otp_core.hotp(key, counter, self.config.digits, self.config.algorithm)

    def generate(self, timestamp_ms: Optional[int] = None) -> str:
        if timestamp_ms is None:
            timestamp_ms = otp_core.now_ms()
        return self.code_at(otp_core.totp_counter(timestamp_ms, self.period))

    def remaining(self, timestamp_ms: Optional[int] = None) -> int:
        """Milliseconds until the current code expires."""
        if timestamp_ms is None:
            timestamp_ms = otp_core.now_ms()
        return otp_core.remaining_ms(timestamp_ms, self.period)

    def verify(self, code: str, timestamp_ms: Optional[int] = None, window: int = 1) -> bool:
        """
        Check a user-entered code against the current window +/- ``window`` steps.

        Steam codes are compared case-insensitively; spaces are ignored.
        """
        if timestamp_ms is None:
            timestamp_ms = otp_core.now_ms()
        candidate = "".join(str(code).split()).upper().encode("utf-8")
        counter = otp_core.totp_counter(timestamp_ms, self.period)
        for offset in range(-window, window + 1):
            test_counter = counter + offset
            if test_counter < 0 or test_counter > otp_core.MAX_COUNTER:
                continue
            if hmac.compare_digest(self.code_at(test_counter).encode("ascii"), candidate):
                return True
        return False

    def __repr__(self):
        return f"<Generator variant={self.config.variant.value} period={self.period}>"


def get_generator(text: str) -> Tuple[Optional[Generator], Optional[OtpError]]:
    """
    Parse key text and build its generator.

    Returns:
        (generator, None) on success, (None, error) when the key cannot be parsed.
    """
    try:
        config = parse_input(text)
    except OtpError as e:
        logger.warning("Failed to parse authenticator key: %s", e)
        return None, e
    return Generator(config), None
