"""
parser.py — turn user-supplied key text into an OtpConfig.

Accepted shapes:
  otpauth://totp/<label>?secret=<base32>[&issuer=..][&period=N][&algorithm=A][&digits=D]
  steam://<base32>
  <base32>                  (bare secret, e.g. pasted from a password manager)

otpauth://hotp/... and other OTP types are rejected with "Invalid authenticator key".
The secret is never decoded here; see OtpConfig.secret_bytes().
"""
from typing import Optional
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit

from .exceptions import ParseError
from .models import Algorithm, OtpConfig, Variant
from .otp_core import DEFAULT_DIGITS, DEFAULT_TIME_STEP

OTPAUTH_PREFIX = "otpauth://"
STEAM_PREFIX = "steam://"
INVALID_KEY = "Invalid authenticator key"
PARSE_FAILED = "Failed to parse authenticator key"
SECRET_MASK = "******"


def parse_input(text: str) -> OtpConfig:
    """
    Classify the key text by prefix and build its configuration.

    Raises:
        ParseError: unsupported otpauth type or malformed URI
        UnsupportedAlgorithmError: unknown algorithm parameter
        ConfigurationError: digits/period out of range
    """
    text = (text or "").strip()
    lowered = text.lower()

    if lowered.startswith(OTPAUTH_PREFIX):
        return parse_otpauth_uri(text)

    if lowered.startswith(STEAM_PREFIX):
        secret = text[len(STEAM_PREFIX):].strip()
        if not secret:
            raise ParseError("Invalid Steam Guard key", reason="secret")
        return OtpConfig.steam(secret)

    return OtpConfig(secret=text)


def parse_otpauth_uri(uri: str) -> OtpConfig:
    try:
        parsed = urlsplit(uri)
    except ValueError as e:
        raise ParseError(PARSE_FAILED, reason="uri") from e

    if parsed.netloc.lower() != "totp":
        raise ParseError(INVALID_KEY, reason="type")

    query = {}
    if parsed.query:
        try:
            query = parse_qs(parsed.query, keep_blank_values=True, strict_parsing=True)
        except ValueError as e:
            raise ParseError(PARSE_FAILED, reason="query") from e

    def first(key: str) -> Optional[str]:
        values = query.get(key)
        if not values:
            return None
        return values[0].strip()

    secret = first("secret")
    if not secret:
        raise ParseError(PARSE_FAILED, reason="secret")

    issuer, account = _split_label(parsed.path)
    issuer = first("issuer") or issuer

    return OtpConfig(
        secret=secret,
        period=_parse_int(first("period"), DEFAULT_TIME_STEP, "period"),
        digits=_parse_int(first("digits"), DEFAULT_DIGITS, "digits"),
        algorithm=Algorithm.parse(first("algorithm")),
        issuer=issuer,
        account=account,
    )


def _split_label(path: str):
    """'/ACME:alice@example.com' -> ('ACME', 'alice@example.com')"""
    label = unquote(path.lstrip("/")).strip()
    if not label:
        return None, None
    if ":" in label:
        issuer, account = label.split(":", 1)
        return issuer.strip() or None, account.strip() or None
    return None, label


def _parse_int(value: Optional[str], default: int, field: str) -> int:
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ParseError(PARSE_FAILED, reason=field) from e


def format_uri(config: OtpConfig, hide_secret: bool = False) -> str:
    """
    Render a config back into key text an authenticator app can import.

    - Steam:    steam://<secret>
    - Standard: otpauth://totp/{issuer}:{account}?secret=...&issuer=...&algorithm=...&digits=...&period=...

    With hide_secret the secret is replaced by SECRET_MASK, for display.
    """
    secret = SECRET_MASK if hide_secret else config.secret
    if config.variant is Variant.STEAM:
        return STEAM_PREFIX + secret

    label = config.account or ""
    if config.issuer:
        label = f"{config.issuer}:{label}"
    params = {}
    if config.issuer:
        params["issuer"] = config.issuer
    params.update(
        algorithm=config.algorithm.value,
        digits=config.digits,
        period=config.period,
    )
    label = quote(label, safe=":@")
    # the mask is written as-is, urlencode would escape '*'
    secret = secret if hide_secret else quote(secret, safe="")
    return f"{OTPAUTH_PREFIX}totp/{label}?secret={secret}&{urlencode(params, quote_via=quote)}"
