"""Login and registration through the HTTP API."""

from fastapi.testclient import TestClient

from src.bookstore.core.services.jwt import JwtVerificationService


class TestRegistration:
    """Test POST /api/users/register."""

    def test_register_succeeds(self, client: TestClient):
        response = client.post(
            "/api/users/register", json={"email": "a@b.com", "password": "Secret1"}
        )

        assert response.status_code == 200
        assert response.json() == {"succeeded": True}

    def test_register_then_login(self, client: TestClient):
        credentials = {"emailAddress": "a@b.com", "password": "Secret1"}
        client.post("/api/users/register", json=credentials)

        response = client.post("/api/users/login", json=credentials)

        assert response.status_code == 200
        token = response.json()["token"]
        assert token
        claims = JwtVerificationService().verify_jwt(token)
        assert claims.subject == "a@b.com"
        assert claims.roles == ["Customer"]
        assert claims.expires_at - claims.issued_at == 300

    def test_duplicate_email(self, client: TestClient):
        credentials = {"emailAddress": "a@b.com", "password": "Secret1"}
        client.post("/api/users/register", json=credentials)

        response = client.post("/api/users/register", json=credentials)

        assert response.status_code == 400
        body = response.json()
        assert body["succeeded"] is False
        assert body["errors"][0]["code"] == "DuplicateUserName"

    def test_weak_password(self, client: TestClient):
        response = client.post(
            "/api/users/register", json={"emailAddress": "a@b.com", "password": "secret"}
        )

        assert response.status_code == 400
        codes = [e["code"] for e in response.json()["errors"]]
        assert codes == ["PasswordRequiresDigit", "PasswordRequiresUpper"]

    def test_store_fault_is_server_error(self, client: TestClient, monkeypatch):
        from src.bookstore.core.errors import StoreFault
        from src.bookstore.core.services import IdentityService

        def broken_create_user(self, email, password, roles=None):
            raise StoreFault("Identity store create_user failed")

        monkeypatch.setattr(IdentityService, "create_user", broken_create_user)

        response = client.post(
            "/api/users/register", json={"emailAddress": "a@b.com", "password": "Secret1"}
        )

        assert response.status_code == 500
        assert response.json() == {
            "detail": "Something went wrong. Please contact Administrator"
        }

    def test_confirm_password_mismatch(self, client: TestClient):
        response = client.post(
            "/api/users/register",
            json={
                "emailAddress": "a@b.com",
                "password": "Secret1",
                "confirmPassword": "Secret2",
            },
        )

        assert response.status_code == 400

    def test_invalid_email(self, client: TestClient):
        response = client.post(
            "/api/users/register", json={"emailAddress": "not-an-email", "password": "Secret1"}
        )

        assert response.status_code == 400


class TestLogin:
    """Test POST /api/users/login."""

    def test_wrong_password(self, client: TestClient):
        client.post("/api/users/register", json={"email": "a@b.com", "password": "Secret1"})

        response = client.post(
            "/api/users/login", json={"email": "a@b.com", "password": "Secret2"}
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}
        assert "token" not in response.json()

    def test_unknown_user(self, client: TestClient):
        response = client.post(
            "/api/users/login", json={"email": "nobody@b.com", "password": "Secret1"}
        )

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    def test_missing_password(self, client: TestClient):
        response = client.post("/api/users/login", json={"email": "a@b.com"})

        assert response.status_code == 400

    def test_seeded_administrator(self, client: TestClient, admin_headers):
        token = admin_headers["Authorization"].removeprefix("Bearer ")

        assert JwtVerificationService().verify_jwt(token).has_role("Administrator")
