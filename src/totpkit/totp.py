import logging
from typing import Union

from . import utils
from .exceptions import InvalidTimestamp
from .hotp import DEFAULT_DIGITS, DEFAULT_HASH_ALGORITHM, calc_main
from .otp import MAX_COUNTER, HashAlgorithm, byte_secret

logger = logging.getLogger(__name__)

DEFAULT_TIME_STEP = 30
DEFAULT_PAST_STEPS = 2
DEFAULT_FUTURE_STEPS = 1


def timecode(for_time: utils.TimeLike, time_step: int = DEFAULT_TIME_STEP) -> int:
    """
    Returns the HOTP counter for a point in time: whole time steps elapsed
    since the Unix epoch.

    :raises InvalidTimestamp: if ``for_time`` cannot be converted, or the
        counter would not fit in 64 bits
    """
    counter = utils.epoch_seconds(for_time) // time_step
    if counter > MAX_COUNTER:
        raise InvalidTimestamp("Timestamp too far in the future: {!r}".format(for_time))
    return counter


def calc(
    key_b32: str,
    for_time: utils.TimeLike,
    digits: int = DEFAULT_DIGITS,
    hash: Union[str, HashAlgorithm] = DEFAULT_HASH_ALGORITHM,
    time_step: int = DEFAULT_TIME_STEP,
) -> str:
    """
    Calculates the TOTP value for the given time.

    :param key_b32: Base32 encoded key
    :param for_time: epoch seconds, or a datetime
    :param digits: number of digits to return, 1 to 8
    :param hash: "sha1", "sha256" or "sha512", in any letter case
    :param time_step: seconds per counter increment
    :returns: TOTP value like "012345"
    :raises InvalidArgument: (or a subclass) if any parameter is not acceptable
    """
    key_b32 = utils.validate_key(key_b32)
    utils.validate_digits(digits)
    algorithm = utils.validate_hash(hash)
    utils.validate_time_step(time_step)
    counter = timecode(for_time, time_step)

    return calc_main(byte_secret(key_b32), counter, digits, algorithm)


def verify(
    otp: str,
    key_b32: str,
    for_time: utils.TimeLike,
    past_steps: int = DEFAULT_PAST_STEPS,
    future_steps: int = DEFAULT_FUTURE_STEPS,
    digits: int = DEFAULT_DIGITS,
    hash: Union[str, HashAlgorithm] = DEFAULT_HASH_ALGORITHM,
    time_step: int = DEFAULT_TIME_STEP,
) -> bool:
    """
    Verifies a TOTP value supplied by the user.

    Every counter from ``past_steps`` before to ``future_steps`` after the
    one for ``for_time`` is tried, so a modest clock drift between client and
    server is tolerated. The whole window is always compared, whichever
    entry matches, so the running time does not reveal the matching step.

    Rejecting a value that was already accepted is left to the caller.

    :param otp: TOTP value like "012345" specified by the user
    :param key_b32: Base32 encoded key
    :param for_time: epoch seconds, or a datetime
    :param past_steps: acceptable time-steps in the past
    :param future_steps: acceptable time-steps in the future
    :returns: True if verification succeeds, False if it does not
    :raises InvalidArgument: (or a subclass) if any parameter is not acceptable
    """
    key_b32 = utils.validate_key(key_b32)
    utils.validate_digits(digits)
    algorithm = utils.validate_hash(hash)
    utils.validate_time_step(time_step)
    utils.validate_window(past_steps, future_steps)
    current = timecode(for_time, time_step)

    secret = byte_secret(key_b32)
    otp = str(otp)
    first = max(current - past_steps, 0)
    last = min(current + future_steps, MAX_COUNTER)
    logger.debug("Verifying TOTP over counters %d..%d (%s, %d digits)", first, last, algorithm.value, digits)

    matched = False
    for counter in range(first, last + 1):
        if utils.strings_equal(otp, calc_main(secret, counter, digits, algorithm)):
            matched = True

    logger.debug("TOTP verification %s", "succeeded" if matched else "failed")
    return matched
