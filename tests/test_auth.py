"""Registration, login and bearer-token authentication."""

from conftest import register_and_login


class TestRegistration:

    async def test_register_returns_public_profile(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"name": "Carol", "email": "carol@example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "carol@example.com"
        assert body["name"] == "Carol"
        assert "password" not in body
        assert "hashed_password" not in body
        assert "deleted_at" not in body

    async def test_duplicate_email_is_conflict(self, client):
        payload = {"name": "Carol", "email": "carol@example.com", "password": "secret123"}
        await client.post("/api/v1/auth/register", json=payload)

        response = await client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 409

    async def test_short_password_is_rejected(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"name": "Carol", "email": "carol@example.com", "password": "123"},
        )

        assert response.status_code == 400

    async def test_invalid_email_is_rejected(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"name": "Carol", "email": "not-an-email", "password": "secret123"},
        )

        assert response.status_code == 422


class TestLogin:

    async def test_login_returns_user_and_token(self, client):
        await client.post(
            "/api/v1/auth/register",
            json={"name": "Dave", "email": "dave@example.com", "password": "secret123"},
        )

        response = await client.post(
            "/api/v1/auth/login", json={"email": "dave@example.com", "password": "secret123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["email"] == "dave@example.com"
        assert body["token_type"] == "bearer"
        assert body["token"]

    async def test_wrong_password_is_unauthorized(self, client):
        await client.post(
            "/api/v1/auth/register",
            json={"name": "Dave", "email": "dave@example.com", "password": "secret123"},
        )

        response = await client.post(
            "/api/v1/auth/login", json={"email": "dave@example.com", "password": "wrong-one"}
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    async def test_unknown_email_is_unauthorized(self, client):
        response = await client.post(
            "/api/v1/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
        )

        assert response.status_code == 401

    async def test_oauth2_form_login(self, client):
        await client.post(
            "/api/v1/auth/register",
            json={"name": "Erin", "email": "erin@example.com", "password": "secret123"},
        )

        response = await client.post(
            "/api/v1/auth/jwt/login",
            data={"username": "erin@example.com", "password": "secret123"},
        )

        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"


class TestCurrentUser:

    async def test_me_requires_token(self, client):
        response = await client.get("/api/v1/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_me_rejects_garbage_token(self, client):
        response = await client.get("/api/v1/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    async def test_me_returns_profile(self, client, alice_headers):
        response = await client.get("/api/v1/me", headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "alice@example.com"

    async def test_deleted_account_is_locked_out(self, client):
        headers = await register_and_login(client, "frank@example.com", password="secret123")

        response = await client.delete("/api/v1/me", headers=headers)
        assert response.status_code == 204

        assert (await client.get("/api/v1/me", headers=headers)).status_code == 401
        response = await client.post(
            "/api/v1/auth/login", json={"email": "frank@example.com", "password": "secret123"}
        )
        assert response.status_code == 401

    async def test_health_is_public(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
