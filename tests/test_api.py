from __future__ import annotations

from unittest.mock import AsyncMock, patch

from app.models.errors import ContentGenerationError
from tests.conftest import ADMIN_EMAIL, LEGACY_PLACE, legacy_place

PLACE_ID = LEGACY_PLACE["place_id"]


def _register_user(client, email="jane@example.com", password="secret123"):
    return client.post(
        "/auth/register",
        json={"email": email, "password": password, "firstName": "Jane", "lastName": "Doe"},
    )


def _auth_headers(client, email="jane@example.com"):
    token = _register_user(client, email=email).json()["token"]
    return {"Authorization": f"Bearer {token}"}


def test_health_and_root(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["version"] == "1.0.0"


def test_register_user_returns_user_and_token(client) -> None:
    response = _register_user(client, email="Jane@Example.com")

    assert response.status_code == 201
    body = response.json()
    assert body["token"]
    assert body["user"]["email"] == "jane@example.com"
    assert body["user"]["firstName"] == "Jane"
    assert body["user"]["role"] == "user"
    assert "password" not in str(body["user"]).lower()


def test_register_duplicate_email_conflicts(client) -> None:
    _register_user(client)
    response = _register_user(client, email="JANE@example.com")

    assert response.status_code == 409
    assert response.json()["detail"] == "Email already registered"


def test_register_validation_failure_shape(client) -> None:
    response = client.post(
        "/auth/register",
        json={"email": "not-an-email", "password": "123", "firstName": "Jane"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "password", "lastName"} <= fields


def test_login(client) -> None:
    _register_user(client)

    ok = client.post("/auth/login", json={"email": "jane@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["email"] == "jane@example.com"

    wrong = client.post("/auth/login", json={"email": "jane@example.com", "password": "nope"})
    assert wrong.status_code == 401

    unknown = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert unknown.status_code == 401


def test_me_requires_valid_token(client) -> None:
    headers = _auth_headers(client)

    assert client.get("/auth/me", headers=headers).json()["email"] == "jane@example.com"
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_register_place_requires_authentication(client) -> None:
    response = client.post("/places/register", json={"placeId": PLACE_ID})
    assert response.status_code == 401


def test_register_place_requires_place_id(client) -> None:
    response = client.post("/places/register", json={}, headers=_auth_headers(client))

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "placeId"


def test_register_place_then_fetch(client) -> None:
    headers = _auth_headers(client)

    created = client.post("/places/register", json={"placeId": PLACE_ID}, headers=headers)
    assert created.status_code == 201
    body = created.json()
    assert body["externalId"] == PLACE_ID
    assert body["aiDescription"] == "A classic Viennese coffee house."
    assert body["aiTags"] == ["coffee", "historic"]
    assert body["category"] == "Cultural"
    assert body["photos"][0]["widthPx"] == 1200

    again = client.post("/gplace/register", json={"placeId": PLACE_ID}, headers=headers)
    assert again.status_code == 200
    assert again.json()["id"] == body["id"]

    assert client.get(f"/places/{PLACE_ID}").json()["id"] == body["id"]
    assert client.get(f"/assets/{PLACE_ID}").json()["id"] == body["id"]


def test_register_unknown_place_is_404(client) -> None:
    response = client.post(
        "/places/register", json={"placeId": "missing"}, headers=_auth_headers(client)
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Place not found"


def test_register_place_without_geometry_is_500(client, places_client) -> None:
    places_client.places["no-geometry"] = legacy_place(place_id="no-geometry", geometry=None)

    response = client.post(
        "/places/register", json={"placeId": "no-geometry"}, headers=_auth_headers(client)
    )

    assert response.status_code == 500
    assert response.json()["detail"] == "Place geometry or location is missing"
    assert client.get("/places/no-geometry").status_code == 404


def test_asset_is_fetchable_with_empty_ai_fields(client, services, generator) -> None:
    generator.description = ContentGenerationError("down")
    generator.tags = ContentGenerationError("down")

    response = client.post(
        "/places/register", json={"placeId": PLACE_ID}, headers=_auth_headers(client)
    )
    assert response.status_code == 201

    asset = client.get(f"/assets/{PLACE_ID}").json()
    assert asset["aiDescription"] == ""
    assert asset["aiTags"] == []


def test_unknown_asset_is_404(client) -> None:
    assert client.get("/assets/missing").status_code == 404
    assert client.get("/places/missing").status_code == 404


def test_non_admin_delete_is_forbidden_without_touching_persistence(client, services) -> None:
    headers = _auth_headers(client)
    client.post("/places/register", json={"placeId": PLACE_ID}, headers=headers)

    with patch.object(services.assets, "delete", AsyncMock(return_value=True)) as delete:
        response = client.delete(f"/places/{PLACE_ID}", headers=headers)

    assert response.status_code == 403
    delete.assert_not_called()
    assert client.get(f"/places/{PLACE_ID}").status_code == 200


def test_delete_requires_authentication(client) -> None:
    assert client.delete(f"/places/{PLACE_ID}").status_code == 401


def test_admin_can_delete_place(client) -> None:
    admin_headers = _auth_headers(client, email=ADMIN_EMAIL)
    client.post("/places/register", json={"placeId": PLACE_ID}, headers=admin_headers)

    response = client.delete(f"/places/{PLACE_ID}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["placeId"] == PLACE_ID

    assert client.get(f"/places/{PLACE_ID}").status_code == 404
    assert client.delete(f"/places/{PLACE_ID}", headers=admin_headers).status_code == 404


def test_search_requires_query_or_coordinates(client) -> None:
    response = client.get("/places/search", params={"lat": 48.2})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_search_returns_mapped_places(client, places_client) -> None:
    places_client.search_results = [
        legacy_place(),
        legacy_place(place_id="no-geometry", geometry=None),
    ]

    by_text = client.get("/places/search", params={"query": "coffee vienna"})
    assert by_text.status_code == 200
    assert [place["externalId"] for place in by_text.json()] == [PLACE_ID]

    nearby = client.get("/places/search", params={"lat": 48.2, "lng": 16.36, "radius": 500})
    assert nearby.status_code == 200
    assert nearby.json()[0]["displayName"]["text"] == "Cafe Central"


def test_landing_page_generation(client, generator) -> None:
    headers = _auth_headers(client)
    client.post("/places/register", json={"placeId": PLACE_ID}, headers=headers)

    response = client.post(f"/assets/{PLACE_ID}/landing-page", headers=headers)
    assert response.status_code == 200
    assert response.json()["aiLandingPage"] == "<html><body>Cafe Central</body></html>"

    generator.landing_page = ContentGenerationError("down")
    failed = client.post(f"/assets/{PLACE_ID}/landing-page", headers=headers)
    assert failed.status_code == 502


def test_landing_page_requires_authentication_and_asset(client) -> None:
    assert client.post(f"/assets/{PLACE_ID}/landing-page").status_code == 401
    missing = client.post("/assets/missing/landing-page", headers=_auth_headers(client))
    assert missing.status_code == 404
