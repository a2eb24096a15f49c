from jose import jwt

from whisk.app.schemas.auth import CurrentUser


def test_auth_required_missing_header(client):
    response = client.get("/recipes")
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"


def test_auth_invalid_token(client):
    response = client.get("/recipes", headers={"Authorization": "Bearer not-a-real-token"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_auth_token_without_subject(client, auth_settings):
    token = jwt.encode({"email": "nobody@example.com"}, auth_settings.auth_secret_key, algorithm=auth_settings.auth_algorithm)
    response = client.get("/recipes", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_auth_wrong_secret(client, auth_settings):
    token = jwt.encode({"sub": "user-1"}, "some-other-secret", algorithm=auth_settings.auth_algorithm)
    response = client.get("/recipes", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


def test_protected_routes_require_auth(client):
    assert client.post("/recipes/parse", json={"url": "https://example.com"}).status_code == 401
    assert client.post("/recipes/manual", json={"recipeText": "x"}).status_code == 401
    assert client.get("/chat/recipes/1/notes").status_code == 401
    assert client.post("/chat/recipes/1/chat", json={"message": "hi"}).status_code == 401


def test_health_is_public(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_current_user_keeps_claims():
    user = CurrentUser.from_claims({"sub": 42, "email": "a@example.com", "org": "kitchen"})
    assert user.id == "42"
    assert user.email == "a@example.com"
    assert user.claims["org"] == "kitchen"
