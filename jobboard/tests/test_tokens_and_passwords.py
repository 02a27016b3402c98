"""
Session tokens and password hashing.
"""
from datetime import timedelta

import pytest
from jose import jwt

from jobboard.app.services.sessions import SessionTokens, require_admin
from jobboard.app.utils.error_handlers import ForbiddenError, TokenExpired, TokenMalformed
from jobboard.app.utils.jwt import ALGORITHM, create_access_token, decode_access_token
from jobboard.app.utils.security import hash_password, verify_password

SECRET = "unit-test-secret"


class TestSessionTokens:
    def setup_method(self):
        self.tokens = SessionTokens(SECRET, admin_expire_minutes=60 * 24, user_expire_minutes=60 * 24 * 7)

    def test_issue_and_verify(self):
        token = self.tokens.issue("u1", "admin", username="admin")
        claims = self.tokens.verify(token)
        assert claims["sub"] == "u1"
        assert claims["role"] == "admin"
        assert claims["username"] == "admin"

    def test_admin_expires_after_one_day(self):
        claims = self.tokens.verify(self.tokens.issue("u1", "admin"))
        assert claims["exp"] - claims["iat"] == 24 * 60 * 60

    def test_user_expires_after_seven_days(self):
        claims = self.tokens.verify(self.tokens.issue("u2", "user"))
        assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60
        assert "username" not in claims

    def test_expired(self):
        token = create_access_token({"sub": "u1", "role": "admin"}, SECRET, timedelta(seconds=-1))
        with pytest.raises(TokenExpired):
            self.tokens.verify(token)

    def test_other_secret_is_malformed(self):
        token = SessionTokens("another-secret").issue("u1", "admin")
        with pytest.raises(TokenMalformed):
            self.tokens.verify(token)

    def test_garbage_is_malformed(self):
        with pytest.raises(TokenMalformed):
            self.tokens.verify("a.b.c")

    def test_missing_role_claim_is_malformed(self):
        token = create_access_token({"sub": "u1"}, SECRET, timedelta(minutes=5))
        with pytest.raises(TokenMalformed):
            self.tokens.verify(token)

    def test_other_algorithm_is_rejected(self):
        token = jwt.encode({"sub": "u1", "role": "admin"}, SECRET, algorithm="HS512")
        with pytest.raises(TokenMalformed):
            decode_access_token(token, SECRET)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            SessionTokens("")

    def test_expired_and_malformed_are_forbidden(self):
        assert TokenExpired().status_code == 403
        assert TokenMalformed().status_code == 403
        assert ALGORITHM == "HS256"


class TestRequireAdmin:
    def test_admin_passes(self):
        claims = {"sub": "u1", "role": "admin"}
        assert require_admin(claims) is claims

    @pytest.mark.parametrize("role", ["user", "", None, "Admin"])
    def test_other_roles_forbidden(self, role):
        with pytest.raises(ForbiddenError) as exc:
            require_admin({"sub": "u1", "role": role})
        assert exc.value.status_code == 403


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("Testpass123!", rounds=4)
        assert hashed != "Testpass123!"
        assert verify_password("Testpass123!", hashed)
        assert not verify_password("wrong", hashed)

    def test_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_missing_hash_never_matches(self):
        assert verify_password("anything", None) is False

    def test_non_bcrypt_hash_never_matches(self):
        assert verify_password("anything", "plaintext") is False

    def test_empty_password_refused(self):
        with pytest.raises(ValueError):
            hash_password("")

    def test_overlong_password_refused(self):
        with pytest.raises(ValueError):
            hash_password("x" * 73)

    def test_overlong_input_never_matches(self):
        stored = "p" * 72
        hashed = hash_password(stored, rounds=4)
        assert verify_password(stored, hashed)
        assert not verify_password(stored + "extra", hashed)

    def test_empty_input_never_matches(self):
        assert verify_password("", hash_password("secret", rounds=4)) is False
