import base64
import hashlib
from enum import Enum
from typing import Any, Callable, Dict, Union

from .exceptions import InvalidKeyFormat, UnsupportedHash

MAX_COUNTER = 2**64 - 1


class HashAlgorithm(str, Enum):
    """
    Digest algorithms accepted for the HMAC step.

    The set is closed on purpose: anything hashlib happens to offer on the
    running platform is still rejected unless it is listed here.
    """

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @classmethod
    def parse(cls, value: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        """
        :param value: a member, or its name in any letter case ("SHA256", "sha256")
        :raises UnsupportedHash: if ``value`` is not one of the supported algorithms
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise UnsupportedHash()
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnsupportedHash("Unsupported hash algorithm: {!r}".format(value)) from None


_DIGESTS: Dict[HashAlgorithm, Callable[..., Any]] = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}


def digest_for(algorithm: Union[str, HashAlgorithm]) -> Callable[..., Any]:
    """
    Returns the hashlib constructor to hand to ``hmac.new`` for ``algorithm``.
    """
    return _DIGESTS[HashAlgorithm.parse(algorithm)]


def encode_secret(raw: bytes) -> str:
    """
    Encodes raw key bytes as unpadded, uppercase Base32.

    The otpauth scheme does not use Base32 padding, and some authenticator
    apps choke on it, so trailing "=" is stripped.
    """
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def byte_secret(key_b32: str) -> bytes:
    """
    Decodes a Base32 shared secret into the raw HMAC key.

    Lower case is accepted. Missing padding is restored before decoding,
    since b32decode insists on a length that is a multiple of 8.

    :raises InvalidKeyFormat: if the text is not decodable Base32
    """
    secret = key_b32.upper().rstrip("=")
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(secret)
    except ValueError as e:
        raise InvalidKeyFormat("Invalid shared secret key given: {}".format(e)) from e


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns a counter into the OATH specified bytestring: an unsigned,
    big-endian integer of ``padding`` bytes, fed to the HMAC along with the
    secret.
    """
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))
