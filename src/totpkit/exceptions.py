from typing import Optional


class OTPError(Exception):
    """
    Base class for every error raised by totpkit.
    """


class InvalidArgument(OTPError, ValueError):
    """
    Raised when a caller passes a malformed parameter.

    Always raised before any HMAC is computed.
    """

    default_reason = "Invalid argument"

    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class InvalidKeyFormat(InvalidArgument):
    default_reason = "Invalid shared secret key given"


class InvalidKeySize(InvalidArgument):
    default_reason = "Key size must be a positive multiple of 8 bits"


class InvalidDigitCount(InvalidArgument):
    default_reason = "Digit-of-return value is out of range"


class UnsupportedHash(InvalidArgument):
    default_reason = "Unsupported hash algorithm"


class InvalidTimeStep(InvalidArgument):
    default_reason = "Time-step value is out of range"


class InvalidTimestamp(InvalidArgument):
    default_reason = "Invalid timestamp given"


class InvalidWindow(InvalidArgument):
    default_reason = "Acceptance window steps must be non-negative integers"


class InsufficientEntropy(OTPError, RuntimeError):
    """
    Raised when no secure random source could supply the requested bytes.
    """
