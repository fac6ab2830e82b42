from __future__ import annotations

import re
from urllib.parse import parse_qs, unquote, urlparse

import pytest

import totpkit
from totpkit.exceptions import InvalidKeyFormat
from totpkit.utils import build_uri


def test_create_key_uri_with_issuer() -> None:
    uri = totpkit.create_key_uri("JBSWY3DPEHPK3PXP", "alice@google.com", "Example Issuer")
    assert uri == "otpauth://totp/Example%20Issuer:alice%40google.com?secret=JBSWY3DPEHPK3PXP&issuer=Example%20Issuer"


def test_create_key_uri_matches_authenticator_format() -> None:
    expected = re.compile(
        r"^otpauth://totp/Example%20Issuer(?::|%3[Aa])alice(?:@|%40)google\.com"
        r"\?secret=JBSWY3DPEHPK3PXP&issuer=Example%20Issuer$"
    )
    assert expected.match(totpkit.create_key_uri("JBSWY3DPEHPK3PXP", "alice@google.com", "Example Issuer"))


@pytest.mark.parametrize("issuer", ["", "   ", None])
def test_create_key_uri_without_issuer(issuer: object) -> None:
    uri = totpkit.create_key_uri("JBSWY3DPEHPK3PXP", "alice@google.com", issuer)  # type: ignore[arg-type]
    assert uri == "otpauth://totp/alice%40google.com?secret=JBSWY3DPEHPK3PXP"


def test_create_key_uri_trims_names() -> None:
    uri = totpkit.create_key_uri("JBSWY3DPEHPK3PXP", "  alice@google.com\n", "\tExample Issuer ")
    assert uri == "otpauth://totp/Example%20Issuer:alice%40google.com?secret=JBSWY3DPEHPK3PXP&issuer=Example%20Issuer"


def test_create_key_uri_label_is_a_single_path_segment() -> None:
    uri = totpkit.create_key_uri("JBSWY3DPEHPK3PXP", "a/b?c#d", "x&y=z+w")
    parsed = urlparse(uri)
    assert parsed.scheme == "otpauth"
    assert parsed.netloc == "totp"
    assert parsed.path.count("/") == 1
    assert unquote(parsed.path[1:]) == "x&y=z+w:a/b?c#d"
    assert parse_qs(parsed.query) == {"secret": ["JBSWY3DPEHPK3PXP"], "issuer": ["x&y=z+w"]}
    assert "issuer=x%26y%3Dz%2Bw" in parsed.query


def test_create_key_uri_never_emits_optional_parameters() -> None:
    query = urlparse(totpkit.create_key_uri("JBSWY3DPEHPK3PXP", "alice", "Example")).query
    assert set(parse_qs(query)) == {"secret", "issuer"}


def test_create_key_uri_encodes_non_ascii_as_utf8() -> None:
    uri = build_uri("JBSWY3DPEHPK3PXP", "ålice", "Exämple")
    assert uri == "otpauth://totp/Ex%C3%A4mple:%C3%A5lice?secret=JBSWY3DPEHPK3PXP&issuer=Ex%C3%A4mple"


@pytest.mark.parametrize("key", ["JBSWY0DP", "", "JBSW Y3DP", "JBSWY3DP\u212a", "JBSWY3D\u017f"])
def test_create_key_uri_rejects_malformed_key(key: str) -> None:
    with pytest.raises(InvalidKeyFormat):
        totpkit.create_key_uri(key, "alice@google.com", "Example Issuer")


def test_create_key_uri_emits_upper_case_secret() -> None:
    uri = totpkit.create_key_uri("jbswy3dpehpk3pxp", "alice@google.com", "")
    assert uri == "otpauth://totp/alice%40google.com?secret=JBSWY3DPEHPK3PXP"
