#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper around the authenticator generator.

Subcommands:
- code   : print the current code and the seconds it stays valid
- watch  : show codes in real time (Ctrl+C to quit)
- info   : show how a key is interpreted (secret masked)
- verify : check a code against the key
- new    : create a random secret and print its key URI

The key is taken from --key or the OTP_KEY environment variable. It is
never written anywhere.

eg..:
    authenticator-otp code --key JBSWY3DPEHPK3PXP
    authenticator-otp code --key steam://HXDMVJECJJWSRB3HWIZR4IFUGFTMXBOZ --at 1672531200000
    OTP_KEY="otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP" authenticator-otp watch
    authenticator-otp verify --key JBSWY3DPEHPK3PXP --code 123456 --window 1
    authenticator-otp new --account alice@example --issuer MyService
"""

import argparse
import logging
import os
import sys
import time

import pyotp

from . import otp_core
from .exceptions import OtpError
from .generator import Generator, get_generator
from .models import OtpConfig
from .parser import format_uri

logger = logging.getLogger(__name__)

KEY_ENV = "OTP_KEY"


def _bounded_int(minimum, maximum):
    """argparse type: integer within [minimum, maximum]."""
    def convert(text):
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
        if not minimum <= value <= maximum:
            raise argparse.ArgumentTypeError(f"must be between {minimum} and {maximum}")
        return value
    return convert


timestamp_ms = _bounded_int(0, otp_core.MAX_TIMESTAMP_MS)


def _generator(args) -> Generator:
    key = args.key or os.environ.get(KEY_ENV)
    if not key:
        raise OtpError(f"No key given. Use --key or set {KEY_ENV}.")
    gen, err = get_generator(key)
    if err:
        raise err
    return gen


# --- CLI command handlers ---
def cmd_code(args):
    gen = _generator(args)
    code = gen.generate(args.at)
    remaining = gen.remaining(args.at) // 1000
    print(f"{code}  (valid ~{remaining:2d}s)")


def cmd_watch(args):
    gen = _generator(args)
    print(f"Press Ctrl+C to quit. Generating codes every {gen.period}s...\n")
    last_code = None
    try:
        while True:
            now = otp_core.now_ms()
            code = gen.generate(now)
            remaining = gen.remaining(now) // 1000
            if code != last_code:
                print(f"Code: {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")


def cmd_info(args):
    cfg = _generator(args).config
    print(f"variant:   {cfg.variant.value}")
    print(f"period:    {cfg.period}s")
    print(f"digits:    {cfg.digits}")
    print(f"algorithm: {cfg.algorithm.value}")
    if cfg.issuer:
        print(f"issuer:    {cfg.issuer}")
    if cfg.account:
        print(f"account:   {cfg.account}")
    print(f"uri:       {format_uri(cfg, hide_secret=True)}")


def cmd_verify(args):
    gen = _generator(args)
    if gen.verify(args.code, args.at, window=args.window):
        print("[+] Code is VALID")
        return 0
    print("[-] Code is INVALID")
    return 1


def cmd_new(args):
    secret = pyotp.random_base32()
    if args.steam:
        cfg = OtpConfig.steam(secret)
    else:
        cfg = OtpConfig(secret=secret, digits=args.digits, period=args.period,
                        issuer=args.issuer, account=args.account)
    logger.debug("Generated %d-bit secret", len(secret) * 5)
    print(format_uri(cfg))


def cmd_help(args):
    print("'authenticator-otp -h' for help.")


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--key", help=f"otpauth:// URI, steam:// key or Base32 secret (default: ${KEY_ENV})")
    common.add_argument("--verbose", action="store_true", help="Verbose output")

    p = argparse.ArgumentParser(description="TOTP / Steam Guard code generator")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help, verbose=False)

    pc = sub.add_parser("code", parents=[common], help="Print the current code")
    pc.add_argument("--at", type=timestamp_ms, help="Unix time in milliseconds (default: now)")
    pc.set_defaults(func=cmd_code)

    pw = sub.add_parser("watch", parents=[common], help="Show codes in real time")
    pw.set_defaults(func=cmd_watch)

    pi = sub.add_parser("info", parents=[common], help="Show how the key is interpreted")
    pi.set_defaults(func=cmd_info)

    pv = sub.add_parser("verify", parents=[common], help="Verify a code")
    pv.add_argument("--code", required=True, help="Code to verify")
    pv.add_argument("--at", type=timestamp_ms, help="Unix time in milliseconds (default: now)")
    pv.add_argument("--window", type=_bounded_int(0, otp_core.MAX_VERIFY_WINDOW), default=1,
                    help="Allowed +/- step window (0-10)")
    pv.set_defaults(func=cmd_verify)

    pn = sub.add_parser("new", help="Create a random secret and print its key URI")
    pn.add_argument("--account", default="user@example", help="Account label for otpauth URI")
    pn.add_argument("--issuer", default="otp-tool", help="Issuer label for otpauth URI")
    pn.add_argument("--digits", type=int, default=otp_core.DEFAULT_DIGITS, help="Number of OTP digits")
    pn.add_argument("--period", type=int, default=otp_core.DEFAULT_TIME_STEP, help="TOTP time step (seconds)")
    pn.add_argument("--steam", action="store_true", help="Print a steam:// key instead")
    pn.add_argument("--verbose", action="store_true", help="Verbose output")
    pn.set_defaults(func=cmd_new)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    try:
        return args.func(args) or 0
    except OtpError as e:
        print(f"[!] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
