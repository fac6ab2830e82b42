import logging
from typing import Optional

from . import entropy
from . import hotp as hotp
from . import totp as totp
from .entropy import RandomSource
from .exceptions import (
    InsufficientEntropy as InsufficientEntropy,
    InvalidArgument as InvalidArgument,
    InvalidDigitCount as InvalidDigitCount,
    InvalidKeyFormat as InvalidKeyFormat,
    InvalidKeySize as InvalidKeySize,
    InvalidTimeStep as InvalidTimeStep,
    InvalidTimestamp as InvalidTimestamp,
    InvalidWindow as InvalidWindow,
    OTPError as OTPError,
    UnsupportedHash as UnsupportedHash,
)
from .otp import HashAlgorithm as HashAlgorithm
from .otp import encode_secret
from .totp import calc as calc
from .totp import verify as verify
from .utils import build_uri

__version__ = "1.0.0"

logger = logging.getLogger(__name__)

DEFAULT_KEY_SIZE_BITS = 80


def generate_key(size_bits: int = DEFAULT_KEY_SIZE_BITS, source: Optional[RandomSource] = None) -> str:
    """
    Generates a new shared secret.

    :param size_bits: key size in bits, a positive multiple of 8
    :param source: where the random bytes come from; the platform's secure
        sources by default
    :returns: the key as unpadded, upper case Base32
    :raises InvalidKeySize: if ``size_bits`` is not a positive multiple of 8
    :raises InsufficientEntropy: if no secure random source is available
    """
    if not isinstance(size_bits, int) or isinstance(size_bits, bool) or size_bits < 8 or size_bits % 8 != 0:
        raise InvalidKeySize("Key size must be a positive multiple of 8 bits, got {!r}".format(size_bits))

    logger.debug("Generating %d-bit shared secret", size_bits)
    return encode_secret(entropy.generate(size_bits // 8, source))


def create_key_uri(key_b32: str, account_name: str, issuer: str = "") -> str:
    """
    Creates the otpauth:// URI used to set up an authenticator app such as
    Google Authenticator. See :func:`totpkit.utils.build_uri`.
    """
    return build_uri(key_b32, account_name, issuer)
