"""
Unit tests for session endpoints and token handling.

Tests:
- Issuing a session cookie
- Cookie flags per environment
- Logout
- Rejection of missing, expired and forged tokens
"""

import time
from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import settings
from app.core.security import create_access_token, decode_token

BUYER_EMAIL = "buyer@example.com"


class TestIssueSession:
    """Tests for POST /jwt"""

    def test_issue_session_sets_cookie(self, client):
        response = client.post("/jwt", json={"email": BUYER_EMAIL})

        assert response.status_code == 200
        assert response.json() == {"success": True}

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{settings.SESSION_COOKIE_NAME}=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=31536000" in set_cookie

    def test_token_carries_claims(self, client):
        response = client.post("/jwt", json={"email": BUYER_EMAIL, "name": "Jane Buyer"})

        token = response.cookies[settings.SESSION_COOKIE_NAME]
        payload = decode_token(token)
        assert payload["email"] == BUYER_EMAIL
        assert payload["name"] == "Jane Buyer"
        assert "exp" in payload

    def test_token_not_in_body(self, client):
        response = client.post("/jwt", json={"email": BUYER_EMAIL})
        assert "token" not in response.json()

    def test_development_cookie_flags(self, client):
        set_cookie = client.post("/jwt", json={"email": BUYER_EMAIL}).headers["set-cookie"].lower()

        assert "samesite=strict" in set_cookie
        assert "secure" not in set_cookie

    def test_production_cookie_flags(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ENVIRONMENT", "production")

        set_cookie = client.post("/jwt", json={"email": BUYER_EMAIL}).headers["set-cookie"].lower()

        assert "samesite=none" in set_cookie
        assert "secure" in set_cookie

    @pytest.mark.parametrize("body", [{}, {"email": "not-an-email"}, {"name": "No Email"}])
    def test_requires_valid_email(self, client, body):
        response = client.post("/jwt", json=body)
        assert response.status_code == 422

    def test_cookie_grants_access(self, client):
        """The cookie set by /jwt authenticates later requests"""
        client.post("/jwt", json={"email": BUYER_EMAIL})

        response = client.get(f"/jobs/{BUYER_EMAIL}")

        assert response.status_code == 200
        assert response.json() == []


class TestLogout:
    """Tests for GET /logout"""

    def test_logout_clears_cookie(self, client):
        client.post("/jwt", json={"email": BUYER_EMAIL})

        response = client.get("/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f'{settings.SESSION_COOKIE_NAME}=""')
        assert "Max-Age=0" in set_cookie

    def test_logged_out_client_is_unauthorized(self, client):
        client.post("/jwt", json={"email": BUYER_EMAIL})
        client.get("/logout")

        response = client.get(f"/jobs/{BUYER_EMAIL}")

        assert response.status_code == 401


class TestTokenValidation:
    """Tests for the session dependency"""

    def test_expired_token(self, client):
        token = create_access_token({"email": BUYER_EMAIL}, expires_delta=timedelta(seconds=-10))
        client.cookies.set(settings.SESSION_COOKIE_NAME, token)

        response = client.get(f"/jobs/{BUYER_EMAIL}")

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized access"

    def test_forged_token(self, client):
        token = jwt.encode({"email": BUYER_EMAIL}, "someone-elses-secret", algorithm="HS256")
        client.cookies.set(settings.SESSION_COOKIE_NAME, token)

        response = client.get(f"/jobs/{BUYER_EMAIL}")

        assert response.status_code == 401

    def test_garbage_token(self, client):
        client.cookies.set(settings.SESSION_COOKIE_NAME, "not.a.jwt")

        assert client.get(f"/jobs/{BUYER_EMAIL}").status_code == 401

    def test_token_without_email(self, client):
        token = jwt.encode({"sub": "123"}, settings.ACCESS_TOKEN_SECRET, algorithm=settings.ALGORITHM)
        client.cookies.set(settings.SESSION_COOKIE_NAME, token)

        assert client.get(f"/jobs/{BUYER_EMAIL}").status_code == 401

    def test_default_expiry_is_a_year(self):
        token = create_access_token({"email": BUYER_EMAIL})
        claims = jwt.get_unverified_claims(token)
        issued_for = claims["exp"] - int(time.time())

        assert 364 * 86400 < issued_for <= 365 * 86400
