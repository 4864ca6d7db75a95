"""Tests for bearer token identity resolution."""

from datetime import timedelta

import pytest

pytestmark = pytest.mark.unit

from jotion.identity import Identity, IdentityProvider, extract_token_from_header


@pytest.fixture
def provider():
    return IdentityProvider(secret="test-secret", algorithm="HS256")


def test_token_roundtrip(provider):
    token = provider.issue_token("user_123", name="Ada", email="ada@example.com")
    identity = provider.get_user_identity(token)
    assert identity == Identity(subject="user_123", name="Ada", email="ada@example.com")


def test_missing_token_is_unauthenticated(provider):
    assert provider.get_user_identity(None) is None
    assert provider.get_user_identity("") is None


def test_malformed_token(provider):
    assert provider.get_user_identity("not-a-jwt") is None


def test_wrong_secret(provider):
    token = IdentityProvider(secret="other-secret").issue_token("user_123")
    assert provider.get_user_identity(token) is None


def test_expired_token(provider):
    token = provider.issue_token("user_123", expires_in=timedelta(seconds=-10))
    assert provider.get_user_identity(token) is None


def test_issuer_checked_when_configured():
    issuer = IdentityProvider(secret="s", issuer="https://auth.example.com")
    other = IdentityProvider(secret="s", issuer="https://evil.example.com")

    good = issuer.get_user_identity(issuer.issue_token("user_1"))
    assert good.subject == "user_1"
    assert good.issuer == "https://auth.example.com"
    assert issuer.get_user_identity(other.issue_token("user_1")) is None


def test_from_authorization_header(provider):
    token = provider.issue_token("user_123")
    assert provider.from_authorization_header(f"Bearer {token}").subject == "user_123"
    assert provider.from_authorization_header(f"bearer {token}").subject == "user_123"
    assert provider.from_authorization_header(None) is None
    assert provider.from_authorization_header(f"Basic {token}") is None


def test_extract_token_from_header():
    assert extract_token_from_header("Bearer abc") == "abc"
    assert extract_token_from_header("Bearer") is None
    assert extract_token_from_header("Bearer a b") is None
    assert extract_token_from_header("") is None


def test_from_settings(monkeypatch):
    from jotion.config import get_settings

    monkeypatch.setenv("AUTH_SECRET", "from-env")
    monkeypatch.setenv("AUTH_ISSUER", "jotion-tests")
    get_settings.cache_clear()
    try:
        provider = IdentityProvider.from_settings()
        assert provider.secret == "from-env"
        assert provider.issuer == "jotion-tests"
    finally:
        get_settings.cache_clear()
