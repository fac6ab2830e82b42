import hmac
from typing import Union

from . import utils
from .exceptions import InvalidArgument
from .otp import MAX_COUNTER, HashAlgorithm, byte_secret, digest_for, int_to_bytestring

DEFAULT_DIGITS = 6
DEFAULT_HASH_ALGORITHM = HashAlgorithm.SHA1


def dynamic_truncate(hmac_hash: bytes) -> int:
    """
    RFC 4226 dynamic truncation: the low nibble of the last byte picks an
    offset, and the four bytes found there, with the top bit cleared, form a
    31-bit unsigned integer.
    """
    offset = hmac_hash[-1] & 0xF
    return (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )


def calc_main(secret: bytes, counter: int, digits: int, hash: Union[str, HashAlgorithm]) -> str:
    """
    Computes the HOTP value for ``counter``. Inputs are assumed valid; use
    :func:`at` for the checked version.

    :param secret: raw shared secret bytes
    :param counter: the HMAC counter value, 0 <= counter < 2**64
    :param digits: length of the returned code
    :param hash: digest algorithm for the HMAC
    :returns: the code, zero-padded to ``digits`` characters
    """
    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidArgument("Counter must be in [0, 2**64), got {!r}".format(counter))
    hasher = hmac.new(secret, int_to_bytestring(counter), digest_for(hash))
    code = dynamic_truncate(hasher.digest())
    # the padding trick keeps leading zeros
    str_code = str(10_000_000_000 + (code % 10**digits))
    return str_code[-digits:]


def _validate_counter(counter: int) -> int:
    if not utils.is_int(counter) or not 0 <= counter <= MAX_COUNTER:
        raise InvalidArgument("Counter must be an integer in [0, 2**64), got {!r}".format(counter))
    return counter


def at(
    key_b32: str,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    hash: Union[str, HashAlgorithm] = DEFAULT_HASH_ALGORITHM,
) -> str:
    """
    Generates the counter-based OTP for a Base32 secret.

    :param key_b32: secret in base32 format
    :param counter: the OTP HMAC counter
    :param digits: number of integers in the OTP
    :param hash: "sha1", "sha256" or "sha512"
    :returns: OTP
    """
    key_b32 = utils.validate_key(key_b32)
    utils.validate_digits(digits)
    algorithm = utils.validate_hash(hash)
    _validate_counter(counter)
    return calc_main(byte_secret(key_b32), counter, digits, algorithm)


def verify(
    otp: str,
    key_b32: str,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    hash: Union[str, HashAlgorithm] = DEFAULT_HASH_ALGORITHM,
) -> bool:
    """
    Verifies the OTP passed in against the OTP for ``counter``.

    Resynchronising the counter is up to the caller.
    """
    return utils.strings_equal(str(otp), at(key_b32, counter, digits, hash))
