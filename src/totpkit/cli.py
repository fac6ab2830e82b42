"""
totpkit command line tool.

Subcommands:
- key    : generate a new Base32 shared secret
- calc   : print the TOTP value for a key
- hotp   : print the HOTP value for a key and counter
- verify : check a TOTP value against a key
- uri    : print the otpauth:// provisioning URI for a key
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from . import __version__, create_key_uri, generate_key, hotp, totp
from .config import OtpSettings
from .exceptions import OTPError

logger = logging.getLogger(__name__)


def _for_time(args: argparse.Namespace) -> int:
    # the only place the wall clock is read
    return args.time if args.time is not None else int(time.time())


def cmd_key(args: argparse.Namespace) -> int:
    print(generate_key(args.bits))
    return 0


def cmd_calc(args: argparse.Namespace) -> int:
    print(totp.calc(args.key, _for_time(args), args.digits, args.hash, args.step))
    return 0


def cmd_hotp(args: argparse.Namespace) -> int:
    print(hotp.at(args.key, args.counter, args.digits, args.hash))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    ok = totp.verify(
        args.otp,
        args.key,
        _for_time(args),
        past_steps=args.past,
        future_steps=args.future,
        digits=args.digits,
        hash=args.hash,
        time_step=args.step,
    )
    print("valid" if ok else "invalid")
    return 0 if ok else 1


def cmd_uri(args: argparse.Namespace) -> int:
    print(create_key_uri(args.key, args.account, args.issuer))
    return 0


def _add_otp_options(p: argparse.ArgumentParser, settings: OtpSettings, with_time: bool = True) -> None:
    p.add_argument("--digits", type=int, default=settings.digits, help="Number of OTP digits (1-8)")
    p.add_argument("--hash", default=settings.hash, help="sha1, sha256 or sha512")
    if with_time:
        p.add_argument("--step", type=int, default=settings.time_step, help="Time step in seconds")
        p.add_argument("--time", type=int, help="Unix timestamp to use instead of now")


def build_parser(settings: Optional[OtpSettings] = None) -> argparse.ArgumentParser:
    settings = settings or OtpSettings()

    p = argparse.ArgumentParser(prog="totpkit", description="TOTP/HOTP one-time password tool")
    p.add_argument("--version", action="version", version="%(prog)s " + __version__)
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd")

    pk = sub.add_parser("key", help="Generate a new shared secret")
    pk.add_argument("--bits", type=int, default=settings.key_size_bits, help="Key size in bits")
    pk.set_defaults(func=cmd_key)

    pc = sub.add_parser("calc", help="Print the TOTP value for a key")
    pc.add_argument("key", help="Base32 shared secret")
    _add_otp_options(pc, settings)
    pc.set_defaults(func=cmd_calc)

    ph = sub.add_parser("hotp", help="Print the HOTP value for a key and counter")
    ph.add_argument("key", help="Base32 shared secret")
    ph.add_argument("counter", type=int, help="HMAC counter value")
    _add_otp_options(ph, settings, with_time=False)
    ph.set_defaults(func=cmd_hotp)

    pv = sub.add_parser("verify", help="Verify a TOTP value")
    pv.add_argument("otp", help="OTP value to check")
    pv.add_argument("key", help="Base32 shared secret")
    pv.add_argument("--past", type=int, default=settings.past_steps, help="Accepted time steps in the past")
    pv.add_argument("--future", type=int, default=settings.future_steps, help="Accepted time steps in the future")
    _add_otp_options(pv, settings)
    pv.set_defaults(func=cmd_verify)

    pu = sub.add_parser("uri", help="Print the otpauth:// provisioning URI")
    pu.add_argument("key", help="Base32 shared secret")
    pu.add_argument("account", help="Account name, e.g. an email address")
    pu.add_argument("--issuer", default="", help="Issuer name, e.g. your service name")
    pu.set_defaults(func=cmd_uri)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = OtpSettings.from_env()
    except OTPError as e:
        print("totpkit: error: {}".format(e), file=sys.stderr)
        return 2

    parser = build_parser(settings)
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    try:
        return args.func(args)
    except OTPError as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        print("totpkit: error: {}".format(e), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
