#!/usr/bin/env python3
"""
otp_cli.py - command-line wrapper around otp_core.

Subcommands:
- secret   : generate a new shared secret
- hotp     : HOTP token for a counter
- totp     : current TOTP token (optionally refreshed in real time)
- interval : current TOTP time interval
- verify   : verify a HOTP or TOTP token

The secret is always passed on the command line (Base32 by default); the tool
stores nothing. Exit status: 0 ok / valid, 1 invalid token, 2 usage error.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

import otp_core
from otp_core.options import DEFAULT_DIGITS, DEFAULT_TIME_STEP, SECRET_BYTES

logger = logging.getLogger("otp_core.cli")

TEXT_FORMATS = ("base32", "base64")


def _token_options(args) -> dict:
    opts = {"secret_format": args.format}
    if args.digits is not None:
        opts["token_length"] = args.digits
    return opts


def _time_options(args) -> dict:
    opts = {"interval_seconds": args.period, "offset_seconds": args.offset}
    if args.timestamp is not None:
        opts["injected_timestamp"] = args.timestamp
    return opts


# --- CLI command handlers ---
def cmd_secret(args) -> int:
    secret = otp_core.generate_secret(args.bytes, args.format)
    print(secret)
    return 0


def cmd_hotp(args) -> int:
    code = otp_core.hotp_generate(args.secret, args.counter, **_token_options(args))
    print(f"HOTP(counter={args.counter}): {code}")
    return 0


def _totp_at(args, timestamp: int):
    time_opts = dict(_time_options(args), injected_timestamp=timestamp)
    code = otp_core.totp_current(args.secret, **_token_options(args), **time_opts)
    return code, otp_core.totp_remaining_seconds(**time_opts)


def cmd_totp(args) -> int:
    if not args.watch:
        timestamp = args.timestamp if args.timestamp is not None else otp_core.wall_clock()
        code, remaining = _totp_at(args, timestamp)
        print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
        return 0

    print(f"Press Ctrl+C to quit. Generating TOTP every {args.period}s...\n")
    last_code = None
    try:
        while True:
            code, remaining = _totp_at(args, otp_core.wall_clock())
            if code != last_code:
                print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


def cmd_interval(args) -> int:
    print(otp_core.totp_time_interval(**_time_options(args)))
    return 0


def cmd_verify_hotp(args) -> int:
    match = otp_core.hotp_resync(args.secret, args.code, args.counter,
                                 args.look_ahead, **_token_options(args))
    if match is None:
        print("[-] HOTP code is INVALID")
        return 1
    print(f"[+] HOTP code is VALID (next counter = {match + 1})")
    return 0


def cmd_verify_totp(args) -> int:
    opts = dict(_token_options(args), **_time_options(args))
    ok = otp_core.totp_verify(
        args.secret,
        args.code,
        full_scan=args.full_scan,
        acceptable_past_tokens=args.past,
        acceptable_future_tokens=args.future,
        **opts,
    )
    if ok:
        print("[+] TOTP code is VALID")
        return 0
    print("[-] TOTP code is INVALID")
    return 1


# --- Argparse builder ---
def _add_secret_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--secret", required=True, help="Shared secret (Base32 by default)")
    p.add_argument("--format", choices=TEXT_FORMATS, default="base32", help="Secret encoding")
    p.add_argument("--digits", type=int, help=f"Token length (default {DEFAULT_DIGITS})")


def _add_time_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--period", type=int, default=DEFAULT_TIME_STEP, help="TOTP time step (seconds)")
    p.add_argument("--offset", type=int, default=0, help="Seconds added to the timestamp")
    p.add_argument("--timestamp", type=int, help="Unix time to use instead of the clock")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otp-tool", description="HOTP/TOTP (HMAC-SHA1) token tool")
    p.add_argument("--verbose", action="store_true", help="Verbose (debug) logging")
    sub = p.add_subparsers(dest="cmd")

    # secret
    ps = sub.add_parser("secret", help="Generate a random shared secret")
    ps.add_argument("--bytes", type=int, default=SECRET_BYTES, help="Secret size in bytes")
    ps.add_argument("--format", choices=TEXT_FORMATS, default="base32")
    ps.set_defaults(func=cmd_secret)

    # hotp
    ph = sub.add_parser("hotp", help="Generate HOTP code for a specific counter")
    _add_secret_args(ph)
    ph.add_argument("--counter", type=int, required=True)
    ph.set_defaults(func=cmd_hotp)

    # totp
    pt = sub.add_parser("totp", help="Show the current TOTP code")
    _add_secret_args(pt)
    _add_time_args(pt)
    pt.add_argument("--watch", action="store_true", help="Refresh the code in real time")
    pt.set_defaults(func=cmd_totp)

    # interval
    pi = sub.add_parser("interval", help="Print the current TOTP time interval")
    _add_time_args(pi)
    pi.set_defaults(func=cmd_interval)

    # verify
    pv = sub.add_parser("verify", help="Verify an OTP code (TOTP or HOTP)")
    sub_v = pv.add_subparsers(dest="verify_type")

    pvh = sub_v.add_parser("hotp", help="Verify a HOTP code")
    _add_secret_args(pvh)
    pvh.add_argument("--code", required=True, help="OTP code to verify")
    pvh.add_argument("--counter", type=int, required=True, help="Current HOTP counter")
    pvh.add_argument("--look-ahead", type=int, default=0, help="Allowed counter look-ahead")
    pvh.set_defaults(func=cmd_verify_hotp)

    pvt = sub_v.add_parser("totp", help="Verify a TOTP code")
    _add_secret_args(pvt)
    _add_time_args(pvt)
    pvt.add_argument("--code", required=True, help="OTP code to verify")
    pvt.add_argument("--past", type=int, default=0, help="Accepted past intervals")
    pvt.add_argument("--future", type=int, default=0, help="Accepted future intervals")
    pvt.add_argument("--full-scan", action="store_true", help="Always scan the whole window")
    pvt.set_defaults(func=cmd_verify_totp)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    try:
        return args.func(args)
    except otp_core.OtpError as e:
        logger.debug("%s raised %s", args.cmd, e.kind)
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
