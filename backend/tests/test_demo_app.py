"""
End-to-end tests for the demo login app.
"""

import jwt
import pytest

from binding.endpoints import Error
from demo.routes import user_manager
from demo.user_manager import UserManager


COOKIE = user_manager.cookie_name


def _login(client, username="michael", password="swordfish"):
    return client.post("/api/login", json={"username": username, "password": password})


class TestDemoRoutes:

    def test_ping(self, client):
        response = client.get("/api/ping")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_isme_requires_login(self, client):
        response = client.get("/api/isme/1")
        assert response.status_code == 401
        assert response.get_data() == b""

    def test_isme_validates_params_before_services(self, client):
        response = client.get("/api/isme/abc")
        assert response.status_code == 400
        assert response.get_data(as_text=True).startswith("params.id:")

    def test_login_missing_password(self, client):
        response = client.post("/api/login", json={"username": "michael"})
        assert response.status_code == 400
        assert response.get_data(as_text=True) == "body.password: Field required"

    def test_login_wrong_password(self, client):
        response = _login(client, password="catfish")
        assert response.status_code == 401
        assert response.get_data(as_text=True) == "username/password not found"

    def test_login_then_isme_strips_password(self, client):
        response = _login(client)
        assert response.status_code == 200
        assert f"{COOKIE}=" in response.headers["Set-Cookie"]

        response = client.get("/api/isme/1")
        assert response.status_code == 200
        assert response.get_json() == {
            "isme": True,
            "user": {"id": 1, "username": "michael"},
        }

    def test_isme_other_user(self, client):
        _login(client, "mary", "catfish")
        body = client.get("/api/isme/1").get_json()
        assert body["isme"] is False
        assert body["user"] == {"id": 3, "username": "mary"}

    def test_logout_clears_session(self, client):
        _login(client)
        response = client.post("/api/logout")
        assert response.status_code == 200
        assert "Max-Age=0" in response.headers["Set-Cookie"]

        assert client.get("/api/isme/1").status_code == 401

    def test_tampered_cookie_rejected(self, client):
        client.set_cookie(COOKIE, "not-a-token")
        assert client.get("/api/isme/1").status_code == 401


class TestUserManager:

    @pytest.fixture
    def manager(self):
        return UserManager(secret="test-secret", cookie_name="SID")

    def test_token_round_trip(self, manager):
        assert manager.verify_token(manager.generate_token(3)) == 3

    def test_expired_token(self):
        manager = UserManager(secret="test-secret", expiration_hours=-1)
        assert manager.verify_token(manager.generate_token(1)) is None

    def test_token_signed_with_other_secret(self, manager):
        forged = jwt.encode({"user_id": 1}, "other-secret", algorithm="HS256")
        assert manager.verify_token(forged) is None

    def test_login_returns_cookie(self, manager):
        cookies = manager.login("mary", "catfish")
        assert list(cookies) == ["SID"]
        assert manager.verify_token(cookies["SID"]) == 3

    def test_login_rejects_unknown_user(self, manager):
        assert manager.login("nobody", "swordfish") is None

    def test_logout_deletes_cookie(self, manager):
        assert manager.logout() == {"SID": None}

    def test_get_user_unknown_id(self, manager, app):
        token = manager.generate_token(42)
        with app.test_request_context("/", headers={"Cookie": f"SID={token}"}):
            from flask import request
            with pytest.raises(Error) as exc:
                manager.get_user(request)
        assert exc.value.status_code == 401
