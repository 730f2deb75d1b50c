"""Tests for session token minting and validation."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from chainvault.core.modules.session.models import AuthToken
from chainvault.errors import InvalidTokenError
from chainvault.utils import now
from conftest import TEST_SECRET


class TestSessionTokens:
    @pytest.fixture(autouse=True)
    def setup(self, core):
        self.session = core.services.session

    def test_round_trip_carries_user_id(self):
        user_id = uuid4()
        claims = self.session.decode_token(self.session.create_token(user_id))
        assert claims.user_id == user_id

    def test_validity_window_is_seven_days(self):
        claims = self.session.decode_token(self.session.create_token(uuid4()))
        assert claims.expires_at - claims.issued_at == timedelta(days=7)

    def test_token_has_no_admin_claim(self):
        payload = jwt.decode(self.session.create_token(uuid4()), TEST_SECRET, algorithms=["HS256"])
        assert set(payload) == {"user_id", "iat", "exp"}

    def test_expired_token_rejected(self):
        issued = now() - timedelta(days=8)
        token = jwt.encode(
            {"user_id": str(uuid4()), "iat": int(issued.timestamp()), "exp": int((issued + timedelta(days=7)).timestamp())},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="expired"):
            self.session.decode_token(AuthToken(token))

    def test_wrong_secret_rejected(self):
        issued = now()
        token = jwt.encode(
            {"user_id": str(uuid4()), "iat": int(issued.timestamp()), "exp": int((issued + timedelta(hours=1)).timestamp())},
            "another-secret-key-with-at-least-32-bytes",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            self.session.decode_token(AuthToken(token))

    def test_tampered_token_rejected(self):
        token = self.session.create_token(uuid4())
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with pytest.raises(InvalidTokenError):
            self.session.decode_token(AuthToken(f"{header}.{payload}.{flipped}"))

    def test_garbage_rejected(self):
        with pytest.raises(InvalidTokenError):
            self.session.decode_token(AuthToken("not-a-jwt"))

    def test_missing_user_id_rejected(self):
        issued = now()
        token = jwt.encode(
            {"iat": int(issued.timestamp()), "exp": int((issued + timedelta(hours=1)).timestamp())},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError, match="payload"):
            self.session.decode_token(AuthToken(token))

    def test_missing_expiry_rejected(self):
        token = jwt.encode({"user_id": str(uuid4()), "iat": int(now().timestamp())}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            self.session.decode_token(AuthToken(token))
