"""
authenticator package
=====================

TOTP (RFC 6238) and Steam Guard code generation for authenticator keys,
interoperable with Google Authenticator, Bitwarden and Steam.

──────────────────────────────────────────────
Accepted key text
──────────────────────────────────────────────
- otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP&issuer=ACME&period=30
- steam://HXDMVJECJJWSRB3HWIZR4IFUGFTMXBOZ
- JBSWY3DPEHPK3PXP            (bare Base32 secret, 30s / 6 digits / SHA1)

otpauth://hotp/... keys are rejected ("Invalid authenticator key").

──────────────────────────────────────────────
Quick usage
──────────────────────────────────────────────
>>> from authenticator import get_generator
>>> gen, err = get_generator("otpauth://totp/Test?secret=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ&digits=8")
>>> gen.generate(59000)
'94287082'
>>> gen.remaining(59000)
1000

Nothing in this package stores secrets or touches the network; the caller
supplies the key text and polls generate()/remaining() for display.
"""
from .exceptions import (
    ConfigurationError,
    OtpError,
    ParseError,
    SecretDecodeError,
    UnsupportedAlgorithmError,
)
from .generator import Generator, get_generator
from .models import Algorithm, OtpConfig, Variant
from .parser import format_uri, parse_input

__all__ = [
    "Algorithm",
    "ConfigurationError",
    "Generator",
    "OtpConfig",
    "OtpError",
    "ParseError",
    "SecretDecodeError",
    "UnsupportedAlgorithmError",
    "Variant",
    "format_uri",
    "get_generator",
    "parse_input",
]
