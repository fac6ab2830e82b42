import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import InvalidArgument
from .otp import HashAlgorithm

ENV_PREFIX = "TOTPKIT_"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidArgument("{}{} must be an integer, got {!r}".format(ENV_PREFIX, name, raw)) from None


@dataclass
class OtpSettings:
    """
    Default parameters for the command line tool.

    Library functions never read these; they take every parameter explicitly.
    """

    digits: int = 6
    hash: str = HashAlgorithm.SHA1.value
    time_step: int = 30
    past_steps: int = 2
    future_steps: int = 1
    key_size_bits: int = 80

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "OtpSettings":
        """
        Reads TOTPKIT_DIGITS, TOTPKIT_HASH, TOTPKIT_TIME_STEP,
        TOTPKIT_PAST_STEPS, TOTPKIT_FUTURE_STEPS and TOTPKIT_KEY_SIZE_BITS,
        falling back to the defaults for unset variables.
        """
        env = os.environ if env is None else env
        defaults = cls()
        hash_name = (env.get(ENV_PREFIX + "HASH") or "").strip() or defaults.hash
        return cls(
            digits=_env_int(env, "DIGITS", defaults.digits),
            hash=HashAlgorithm.parse(hash_name).value,
            time_step=_env_int(env, "TIME_STEP", defaults.time_step),
            past_steps=_env_int(env, "PAST_STEPS", defaults.past_steps),
            future_steps=_env_int(env, "FUTURE_STEPS", defaults.future_steps),
            key_size_bits=_env_int(env, "KEY_SIZE_BITS", defaults.key_size_bits),
        )
