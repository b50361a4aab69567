"""
End-to-end tests of the HTTP routes.

Each test gets an application with its own in-memory database and a stub
movie catalog; see the ``client`` fixture in conftest.
"""

import uuid

from tests.stubs import GODFATHER, SHAWSHANK


def register(client, username: str) -> dict:
    response = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": "correct-horse",
        },
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def test_health(client):
    response = client.get("/api/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_register_login_and_me(client):
    headers = register(client, "alice")

    me = client.get("/api/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["username"] == "alice"
    assert me.json()["email"] == "alice@example.com"

    login = client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": "correct-horse"},
    )
    assert login.status_code == 200
    assert login.json()["token_type"] == "bearer"

    me_again = client.get(
        "/api/auth/me",
        headers={"Authorization": f"Bearer {login.json()['access_token']}"},
    )
    assert me_again.json()["id"] == me.json()["id"]


def test_register_duplicate_email(client):
    register(client, "alice")
    response = client.post(
        "/api/auth/register",
        json={
            "username": "someone-else",
            "email": "alice@example.com",
            "password": "correct-horse",
        },
    )
    assert response.status_code == 400
    assert response.json()["kind"] == "account_exists"


def test_login_wrong_password(client):
    register(client, "alice")
    response = client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["kind"] == "unauthenticated"


def test_protected_routes_require_token(client):
    assert client.get("/api/watchlist").status_code == 401
    anonymous_review = client.post(
        "/api/reviews", json={"imdb_id": "tt0111161", "rating": 5}
    )
    assert anonymous_review.status_code == 401

    response = client.get(
        "/api/auth/me", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401
    assert response.json()["kind"] == "unauthenticated"


def test_movie_search_creates_movie_once(client, api_catalog):
    first = client.get("/api/movies/search", params={"title": "The Godfather"})
    second = client.get("/api/movies/search", params={"title": "The Godfather"})

    assert first.status_code == 200
    assert first.json()["imdb_id"] == GODFATHER.imdb_id
    assert first.json()["id"] == second.json()["id"]


def test_movie_search_without_match(client):
    response = client.get("/api/movies/search", params={"title": "Nothing Like This"})
    assert response.status_code == 404
    assert response.json()["kind"] == "reference_not_found"


def test_resolve_with_fallback_skips_catalog(client, api_catalog):
    headers = register(client, "alice")
    response = client.post(
        "/api/movies/resolve",
        headers=headers,
        json={"imdb_id": "tt7777777", "title": "Client Only Movie", "year": "2020"},
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Client Only Movie"
    assert api_catalog.calls == []


def test_watchlist_flow(client):
    headers = register(client, "alice")

    added = client.post(
        "/api/watchlist", headers=headers, json={"imdb_id": SHAWSHANK.imdb_id}
    )
    assert added.status_code == 201
    assert added.json()["movie"]["title"] == SHAWSHANK.title

    duplicate = client.post(
        "/api/watchlist", headers=headers, json={"imdb_id": SHAWSHANK.imdb_id}
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["kind"] == "duplicate_association"

    listing = client.get("/api/watchlist", headers=headers)
    assert [item["movie"]["imdb_id"] for item in listing.json()] == [SHAWSHANK.imdb_id]

    entry_id = added.json()["entry"]["id"]
    removed = client.delete(f"/api/watchlist/{entry_id}", headers=headers)
    assert removed.status_code == 200

    assert client.get("/api/watchlist", headers=headers).json() == []


def test_watchlist_entry_of_other_user_cannot_be_removed(client):
    alice = register(client, "alice")
    bob = register(client, "bob")
    added = client.post(
        "/api/watchlist", headers=alice, json={"imdb_id": SHAWSHANK.imdb_id}
    )

    response = client.delete(f"/api/watchlist/{added.json()['entry']['id']}", headers=bob)

    assert response.status_code == 404
    assert response.json()["kind"] == "not_found_or_unauthorized"
    assert len(client.get("/api/watchlist", headers=alice).json()) == 1


def test_watchlist_unknown_movie(client):
    headers = register(client, "alice")
    response = client.post(
        "/api/watchlist", headers=headers, json={"imdb_id": "tt0000000"}
    )
    assert response.status_code == 404
    assert response.json()["kind"] == "reference_not_found"


def test_review_flow(client):
    alice = register(client, "alice")
    bob = register(client, "bob")

    created = client.post(
        "/api/reviews",
        headers=alice,
        json={"imdb_id": SHAWSHANK.imdb_id, "rating": 7},
    )
    assert created.status_code == 201
    review_id = created.json()["review"]["id"]
    assert created.json()["review"]["comment"] is None

    updated = client.put(
        f"/api/reviews/{review_id}", headers=alice, json={"comment": "Great"}
    )
    assert updated.status_code == 200
    assert updated.json()["rating"] == 7
    assert updated.json()["comment"] == "Great"

    hijack = client.put(
        f"/api/reviews/{review_id}", headers=bob, json={"rating": 1}
    )
    assert hijack.status_code == 404
    assert hijack.json()["kind"] == "not_found_or_unauthorized"

    mine = client.get("/api/reviews/me", headers=alice).json()
    assert len(mine) == 1
    assert mine[0]["review"]["rating"] == 7
    assert mine[0]["movie"]["imdb_id"] == SHAWSHANK.imdb_id

    alice_id = client.get("/api/auth/me", headers=alice).json()["id"]
    public = client.get(f"/api/reviews/user/{alice_id}").json()
    assert public == mine

    for_movie = client.get(f"/api/reviews/movie/{SHAWSHANK.imdb_id}").json()
    assert for_movie[0]["author"]["username"] == "alice"

    deleted = client.delete(f"/api/reviews/{review_id}", headers=alice)
    assert deleted.status_code == 200
    assert client.get("/api/reviews/me", headers=alice).json() == []


def test_review_rating_out_of_range_creates_nothing(client, api_catalog):
    headers = register(client, "alice")

    for rating in (0, 11):
        response = client.post(
            "/api/reviews",
            headers=headers,
            json={"imdb_id": SHAWSHANK.imdb_id, "rating": rating},
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_error"

    # The movie was never resolved, so the catalog was never asked
    assert api_catalog.calls == []


def test_review_missing_rating_is_rejected(client):
    headers = register(client, "alice")
    response = client.post(
        "/api/reviews", headers=headers, json={"imdb_id": SHAWSHANK.imdb_id}
    )
    assert response.status_code == 422
    assert response.json()["kind"] == "validation_error"


def test_reviews_for_unknown_movie_and_user_are_empty(client):
    assert client.get("/api/reviews/movie/tt0000000").json() == []
    assert client.get(f"/api/reviews/user/{uuid.uuid4()}").json() == []


def test_review_rating_must_be_a_json_integer(client, api_catalog):
    headers = register(client, "alice")

    for rating in (True, "7", 7.5):
        response = client.post(
            "/api/reviews",
            headers=headers,
            json={"imdb_id": SHAWSHANK.imdb_id, "rating": rating},
        )
        assert response.status_code == 422, rating
        assert response.json()["kind"] == "validation_error"

    assert client.get("/api/reviews/me", headers=headers).json() == []
    assert api_catalog.calls == []


def test_review_update_rating_must_be_a_json_integer(client):
    headers = register(client, "alice")
    created = client.post(
        "/api/reviews",
        headers=headers,
        json={"imdb_id": SHAWSHANK.imdb_id, "rating": 7},
    )
    review_id = created.json()["review"]["id"]

    for rating in (True, "9"):
        response = client.put(
            f"/api/reviews/{review_id}", headers=headers, json={"rating": rating}
        )
        assert response.status_code == 422, rating

    [stored] = client.get("/api/reviews/me", headers=headers).json()
    assert stored["review"]["rating"] == 7


def test_movie_search_blank_title(client, api_catalog):
    response = client.get("/api/movies/search", params={"title": "   "})

    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"
    assert api_catalog.calls == []


def test_error_body_is_documented(client):
    schema = client.get("/openapi.json").json()

    assert "ErrorResponse" in schema["components"]["schemas"]
    conflict = schema["paths"]["/api/watchlist"]["post"]["responses"]["409"]
    assert conflict["content"]["application/json"]["schema"]["$ref"].endswith(
        "/ErrorResponse"
    )
