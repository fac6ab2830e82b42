from __future__ import annotations

import pytest

from totpkit.otp import encode_secret

SHA1_KEY = encode_secret(b"12345678901234567890")
SHA256_KEY = encode_secret(b"12345678901234567890123456789012")
SHA512_KEY = encode_secret(b"1234567890123456789012345678901234567890123456789012345678901234")


@pytest.fixture(autouse=True)
def _clean_totpkit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DIGITS", "HASH", "TIME_STEP", "PAST_STEPS", "FUTURE_STEPS", "KEY_SIZE_BITS"):
        monkeypatch.delenv("TOTPKIT_" + name, raising=False)
