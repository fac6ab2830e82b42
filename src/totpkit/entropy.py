"""
Cryptographically secure random bytes for key generation.

A :class:`RandomSource` has a single operation, ``generate(n)``. The
default source is a :class:`ChainedSource` over every provider the platform
may offer, tried in order until one succeeds.

Acquiring entropy may block, and no timeout is applied here; callers
needing bounded latency must impose their own.
"""

import logging
import os
import secrets
from typing import Optional, Sequence

from .exceptions import InsufficientEntropy, InvalidArgument

logger = logging.getLogger(__name__)

DEV_URANDOM = "/dev/urandom"


class RandomSource(object):
    """
    Base class for secure random byte providers.
    """

    name = "random"

    def generate(self, n: int) -> bytes:
        """
        :param n: number of bytes wanted, positive
        :returns: exactly ``n`` random bytes
        :raises InsufficientEntropy: if no secure bytes are available
        """
        raise NotImplementedError


class SecretsSource(RandomSource):
    name = "secrets"

    def generate(self, n: int) -> bytes:
        try:
            return secrets.token_bytes(n)
        except NotImplementedError as e:
            raise InsufficientEntropy("secrets has no random source on this platform") from e


class OsUrandomSource(RandomSource):
    name = "os.urandom"

    def generate(self, n: int) -> bytes:
        try:
            return os.urandom(n)
        except NotImplementedError as e:
            raise InsufficientEntropy("os.urandom is not available on this platform") from e


class DevUrandomSource(RandomSource):
    name = "/dev/urandom"

    def __init__(self, path: str = DEV_URANDOM) -> None:
        self.path = path

    def generate(self, n: int) -> bytes:
        try:
            with open(self.path, "rb") as f:
                data = f.read(n)
        except OSError as e:
            raise InsufficientEntropy("Cannot read {}: {}".format(self.path, e)) from e
        if len(data) != n:
            raise InsufficientEntropy("Short read from {}".format(self.path))
        return data


class ChainedSource(RandomSource):
    """
    Tries each provider in order and returns the first successful result.
    """

    name = "chain"

    def __init__(self, providers: Sequence[RandomSource]) -> None:
        self.providers = list(providers)

    def generate(self, n: int) -> bytes:
        for provider in self.providers:
            try:
                data = provider.generate(n)
            except (InsufficientEntropy, OSError, NotImplementedError) as e:
                logger.debug("Random source %s failed: %s", provider.name, e)
                continue
            if len(data) == n:
                return data
            logger.debug("Random source %s returned %d bytes, wanted %d", provider.name, len(data), n)
        raise InsufficientEntropy("No secure random source could supply {} bytes".format(n))


def default_source() -> RandomSource:
    return ChainedSource([SecretsSource(), OsUrandomSource(), DevUrandomSource()])


def generate(n: int, source: Optional[RandomSource] = None) -> bytes:
    """
    Returns ``n`` cryptographically secure random bytes.

    :raises InvalidArgument: if ``n`` is not a positive integer
    :raises InsufficientEntropy: if every provider failed
    """
    if not isinstance(n, int) or isinstance(n, bool) or n < 1:
        raise InvalidArgument("Byte count must be a positive integer, got {!r}".format(n))
    return (source or default_source()).generate(n)
