import calendar
import datetime
import math
import re
import time
import unicodedata
from hmac import compare_digest
from typing import Dict, Optional, Union
from urllib.parse import quote, urlencode

from .exceptions import (
    InvalidDigitCount,
    InvalidKeyFormat,
    InvalidTimeStep,
    InvalidTimestamp,
    InvalidWindow,
)
from .otp import HashAlgorithm

MIN_DIGITS = 1
MAX_DIGITS = 8

TimeLike = Union[int, float, datetime.datetime]

_BASE32_RE = re.compile(r"[A-Za-z2-7]+=*")


def is_int(value: object) -> bool:
    # bool is an int subclass, but True is never a meaningful digit count
    return isinstance(value, int) and not isinstance(value, bool)


def validate_key(key_b32: str) -> str:
    """
    Checks that ``key_b32`` looks like Base32 text and returns it in upper case.

    :raises InvalidKeyFormat: on any character outside A-Z, 2-7 and trailing "="
    """
    if not isinstance(key_b32, str) or not _BASE32_RE.fullmatch(key_b32):
        raise InvalidKeyFormat()
    return key_b32.upper()


def validate_digits(digits: int) -> int:
    # 8 is a historical ceiling; the truncated value would allow up to 10
    if not is_int(digits) or not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidDigitCount(
            "Digit-of-return value is out of range: {!r} (expected {}..{})".format(digits, MIN_DIGITS, MAX_DIGITS)
        )
    return digits


def validate_hash(hash: Union[str, HashAlgorithm]) -> HashAlgorithm:
    return HashAlgorithm.parse(hash)


def validate_time_step(time_step: int) -> int:
    if not is_int(time_step) or time_step < 1:
        raise InvalidTimeStep("Time-step value is out of range: {!r}".format(time_step))
    return time_step


def validate_window(past_steps: int, future_steps: int) -> None:
    for steps in (past_steps, future_steps):
        if not is_int(steps) or steps < 0:
            raise InvalidWindow("Acceptance window steps must be non-negative integers, got {!r}".format(steps))


def epoch_seconds(for_time: TimeLike) -> int:
    """
    Converts a point in time to whole seconds since the Unix epoch.

    Aware datetimes are converted through UTC; naive ones are taken as local
    time. Floats are floored.

    :raises InvalidTimestamp: for any other type, or a time before the epoch
    """
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo:
            seconds = calendar.timegm(for_time.utctimetuple())
        else:
            seconds = int(time.mktime(for_time.timetuple()))
    elif is_int(for_time):
        seconds = for_time
    elif isinstance(for_time, float) and math.isfinite(for_time):
        seconds = int(for_time // 1)
    else:
        raise InvalidTimestamp("Invalid timestamp given: {!r}".format(for_time))

    if seconds < 0:
        raise InvalidTimestamp("Timestamp precedes the Unix epoch: {!r}".format(for_time))
    return seconds


def build_uri(key_b32: str, account_name: str, issuer: Optional[str] = None) -> str:
    """
    Returns the otpauth:// provisioning URI for a TOTP secret. This can then
    be encoded in a QR Code and used to provision an authenticator app.

    Google Authenticator, the de facto standard app, ignores the digits,
    algorithm and period parameters and always assumes 6 digits, SHA1 and
    30 seconds, so they are never emitted.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param key_b32: the Base32 secret
    :param account_name: name of the user account, e.g. an email address
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in the authenticator
    :returns: provisioning URI
    :raises InvalidKeyFormat: if ``key_b32`` is not Base32 text
    """
    key_b32 = validate_key(key_b32)
    account_name = (account_name or "").strip()
    issuer = (issuer or "").strip()

    url_args: Dict[str, str] = {"secret": key_b32}

    label = quote(account_name, safe="")
    if issuer:
        label = quote(issuer, safe="") + ":" + label
        url_args["issuer"] = issuer

    # urlencode form-encodes spaces as "+"; literal "+" was already escaped to %2B
    return "otpauth://totp/{0}?{1}".format(label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
