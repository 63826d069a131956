"""Unit tests for JWT token utilities."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from qq.util.jwt import (
    BadSignatureError,
    ExpiredTokenError,
    InvalidIssuerOrAudienceError,
    MalformedTokenError,
    UnexpectedAlgorithmError,
    create_token,
    create_token_pair,
    verify_token,
)
from tests.conftest import make_auth_settings


@pytest.fixture
def settings():
    return make_auth_settings()


class TestCreateTokenPair:
    """Tests for create_token_pair()."""

    def test_round_trip_carries_user_id(self, settings):
        """Validating an issued access token yields the same user id."""
        user_id = str(uuid4())

        pair = create_token_pair(user_id, settings)
        claims = verify_token(pair.access_token, settings)

        assert claims.user_id == user_id
        assert claims.sub == user_id
        assert claims.iss == settings.issuer
        assert claims.aud == settings.audience

    def test_lifetimes(self, settings):
        """Access lives minutes, refresh lives hours."""
        now = datetime.now(timezone.utc).replace(microsecond=0)

        pair = create_token_pair("u1", settings, now=now)
        access = verify_token(pair.access_token, settings)
        refresh = verify_token(pair.refresh_token, settings)

        assert access.exp - access.iat == timedelta(
            minutes=settings.access_token_expire_minutes
        )
        assert refresh.exp - refresh.iat == timedelta(
            hours=settings.refresh_token_expire_hours
        )

    def test_signed_with_configured_algorithm(self, settings):
        pair = create_token_pair("u1", settings)

        assert jwt.get_unverified_header(pair.access_token)["alg"] == "HS256"


class TestVerifyToken:
    """Tests for verify_token() failure modes."""

    def test_expired(self, settings):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = create_token("u1", timedelta(minutes=5), settings, now=past)

        with pytest.raises(ExpiredTokenError):
            verify_token(token, settings)

    def test_foreign_secret(self, settings):
        """A token signed with another secret fails signature verification."""
        other = make_auth_settings(jwt_secret="another-secret-that-is-long-enough!!")
        token = create_token("u1", timedelta(minutes=5), other)

        with pytest.raises(BadSignatureError):
            verify_token(token, settings)

    def test_none_algorithm_rejected(self, settings):
        """Unsigned tokens are rejected before decoding."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"user_id": "u1", "iat": now, "exp": now + timedelta(minutes=5)},
            None,
            algorithm="none",
        )

        with pytest.raises(UnexpectedAlgorithmError):
            verify_token(token, settings)

    def test_other_hmac_algorithm_rejected(self, settings):
        """Only the configured algorithm is accepted."""
        other = make_auth_settings(jwt_algorithm="HS512")
        token = create_token("u1", timedelta(minutes=5), other)

        with pytest.raises(UnexpectedAlgorithmError):
            verify_token(token, settings)

    def test_wrong_issuer_rejected_when_strict(self, settings):
        other = make_auth_settings(issuer="someone-else")
        token = create_token("u1", timedelta(minutes=5), other)

        with pytest.raises(InvalidIssuerOrAudienceError):
            verify_token(token, settings)

    def test_wrong_audience_rejected_when_strict(self, settings):
        other = make_auth_settings(audience="another-app")
        token = create_token("u1", timedelta(minutes=5), other)

        with pytest.raises(InvalidIssuerOrAudienceError):
            verify_token(token, settings)

    def test_wrong_issuer_accepted_when_lenient(self):
        lenient = make_auth_settings(verify_issuer_audience=False)
        other = make_auth_settings(issuer="someone-else", audience="another-app")
        token = create_token("u1", timedelta(minutes=5), other)

        claims = verify_token(token, lenient)

        assert claims.user_id == "u1"

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
    def test_garbage(self, settings, token):
        with pytest.raises(MalformedTokenError):
            verify_token(token, settings)

    def test_missing_expiry(self, settings):
        token = jwt.encode(
            {
                "user_id": "u1",
                "iss": settings.issuer,
                "aud": settings.audience,
                "iat": datetime.now(timezone.utc),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(MalformedTokenError):
            verify_token(token, settings)

    def test_missing_user_id_yields_empty_claim(self, settings):
        """Tokens without user_id still validate; callers reject the empty id."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "iss": settings.issuer,
                "aud": settings.audience,
                "iat": now,
                "exp": now + timedelta(minutes=5),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        assert verify_token(token, settings).user_id == ""


def test_settings_reject_asymmetric_algorithm():
    """Only HMAC algorithms can be configured."""
    with pytest.raises(ValueError):
        make_auth_settings(jwt_algorithm="RS256")
