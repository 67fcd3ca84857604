from datetime import timedelta

from app.core.security import create_access_token
from app.db.errors import StoreError
from app.db.repositories import RecommendationRepository

RECOMMENDATION = {
    "artist": "Nina Simone",
    "title": "Sinnerman",
    "yt_link": "https://youtu.be/sinnerman",
    "is_public": True,
}


async def create_recommendation(client, headers, **overrides):
    response = await client.post("/v1/recommendations", json={**RECOMMENDATION, **overrides}, headers=headers)
    assert response.status_code == 201
    return response.json()["recommendation"]


async def test_healthcheck(client):
    response = await client.get("/v1/healthcheck")

    assert response.status_code == 200
    assert response.json()["status"] == "available"


async def test_create_recommendation(client, alice_headers):
    response = await client.post("/v1/recommendations", json=RECOMMENDATION, headers=alice_headers)

    assert response.status_code == 201
    body = response.json()["recommendation"]
    assert response.headers["location"] == f"/v1/recommendations/{body['id']}"
    assert body["version"] == 1
    assert body["created_by"]["username"] == "alice"
    assert body["spotify_link"] is None


async def test_create_recommendation_reports_field_errors(client, alice_headers):
    response = await client.post(
        "/v1/recommendations", json={"artist": "", "title": "Sinnerman"}, headers=alice_headers
    )

    assert response.status_code == 422
    assert response.json()["detail"] == {
        "artist": "must be provided",
        "yt_link|spotify_link": "must be provided",
    }


async def test_malformed_body_uses_same_error_shape(client, alice_headers):
    response = await client.post(
        "/v1/recommendations", json={**RECOMMENDATION, "is_public": "maybe"}, headers=alice_headers
    )

    assert response.status_code == 422
    assert "is_public" in response.json()["detail"]


async def test_requests_without_token_are_unauthorized(client):
    response = await client.get("/v1/recommendations")
    assert response.status_code == 401


async def test_expired_or_forged_token_is_unauthorized(client, alice):
    expired = create_access_token(alice.id, expires_delta=timedelta(seconds=-5))

    for token in (expired, "not-a-jwt"):
        response = await client.get("/v1/recommendations", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


async def test_inactive_user_is_forbidden(client, carol_headers):
    response = await client.get("/v1/recommendations", headers=carol_headers)
    assert response.status_code == 403


async def test_write_requires_permission(client, bob_headers):
    response = await client.post("/v1/recommendations", json=RECOMMENDATION, headers=bob_headers)
    assert response.status_code == 403


async def test_get_recommendation_with_comments(client, alice_headers, bob_headers):
    recommendation = await create_recommendation(client, alice_headers)
    for content in ("first", "second"):
        response = await client.post(
            "/v1/comments",
            json={"recommendation_id": recommendation["id"], "content": content},
            headers=alice_headers,
        )
        assert response.status_code == 201

    response = await client.get(f"/v1/recommendations/{recommendation['id']}", headers=bob_headers)

    assert response.status_code == 200
    comments = response.json()["recommendation"]["comments"]
    assert [c["content"] for c in comments] == ["first", "second"]


async def test_bad_ids_are_not_found(client, alice_headers):
    for record_id in ("abc", "0", "-3", "9999", "2147483648", "99999999999999999999"):
        response = await client.get(f"/v1/recommendations/{record_id}", headers=alice_headers)
        assert response.status_code == 404


async def test_patch_applies_only_given_fields(client, alice_headers):
    recommendation = await create_recommendation(client, alice_headers, comment="on repeat")

    response = await client.patch(
        f"/v1/recommendations/{recommendation['id']}",
        json={"title": "Feeling Good", "comment": None},
        headers=alice_headers,
    )

    assert response.status_code == 200
    body = response.json()["recommendation"]
    assert body["title"] == "Feeling Good"
    assert body["artist"] == "Nina Simone"
    assert body["comment"] is None
    assert body["version"] == 2


async def test_patch_with_stale_expected_version_conflicts(client, alice_headers):
    recommendation = await create_recommendation(client, alice_headers)
    url = f"/v1/recommendations/{recommendation['id']}"

    first = await client.patch(url, json={"title": "v2"}, headers={**alice_headers, "X-Expected-Version": "1"})
    second = await client.patch(url, json={"title": "v3"}, headers={**alice_headers, "X-Expected-Version": "1"})

    assert first.status_code == 200
    assert second.status_code == 409


async def test_delete_twice(client, alice_headers):
    recommendation = await create_recommendation(client, alice_headers)
    url = f"/v1/recommendations/{recommendation['id']}"

    assert (await client.delete(url, headers=alice_headers)).status_code == 200
    assert (await client.delete(url, headers=alice_headers)).status_code == 404
    assert (await client.get(url, headers=alice_headers)).status_code == 404


async def test_list_validates_filters(client, alice_headers):
    too_big = await client.get("/v1/recommendations?page_size=1000", headers=alice_headers)
    bad_sort = await client.get("/v1/recommendations?sort=artist", headers=alice_headers)
    not_a_number = await client.get("/v1/recommendations?page=abc", headers=alice_headers)

    assert too_big.status_code == 422
    assert too_big.json()["detail"] == {"page_size": "must be a maximum of 100"}
    assert bad_sort.json()["detail"] == {"sort": "invalid sort value"}
    assert not_a_number.status_code == 422
    assert "page" in not_a_number.json()["detail"]


async def test_list_hides_private_recommendations_from_readers(client, alice_headers, bob_headers):
    await create_recommendation(client, alice_headers, title="public")
    await create_recommendation(client, alice_headers, title="private", is_public=False)

    as_alice = (await client.get("/v1/recommendations", headers=alice_headers)).json()
    as_bob = (await client.get("/v1/recommendations", headers=bob_headers)).json()

    assert as_alice["metadata"]["total_records"] == 2
    assert [r["title"] for r in as_bob["recommendations"]] == ["public"]
    assert as_bob["metadata"] == {"current_page": 1, "page_size": 20, "total_pages": 1, "total_records": 1}


async def test_comment_on_missing_recommendation(client, alice_headers):
    response = await client.post(
        "/v1/comments", json={"recommendation_id": 9999, "content": "hello"}, headers=alice_headers
    )

    assert response.status_code == 422
    assert response.json()["detail"] == {"recommendation_id": "must reference an existing recommendation"}


async def test_reservation_lifecycle(client, alice_headers):
    payload = {"title": "Rehearsal", "start_time": "2024-05-01T18:00:00Z", "end_time": "2024-05-01T19:30:00Z"}

    created = await client.post("/v1/reservations", json=payload, headers=alice_headers)
    assert created.status_code == 201
    reservation = created.json()["reservation"]
    assert reservation["duration_minutes"] == 90

    url = f"/v1/reservations/{reservation['id']}"
    updated = await client.patch(url, json={"color": "#1DB954"}, headers=alice_headers)
    assert updated.status_code == 200
    assert updated.json()["reservation"]["color"] == "#1DB954"
    assert updated.json()["reservation"]["version"] == 2

    listed = await client.get("/v1/reservations?sort=start_time", headers=alice_headers)
    assert listed.json()["metadata"]["total_records"] == 1


async def test_reservation_rejects_inverted_times(client, alice_headers):
    payload = {"title": "Rehearsal", "start_time": "2024-05-01T18:00:00Z", "end_time": "2024-05-01T17:00:00Z"}

    response = await client.post("/v1/reservations", json=payload, headers=alice_headers)

    assert response.status_code == 422
    assert response.json()["detail"] == {"end_time": "must be after start_time"}


async def test_store_failure_is_opaque(client, alice_headers, monkeypatch):
    async def broken_get(self, record_id):
        raise StoreError("database execute failed")

    monkeypatch.setattr(RecommendationRepository, "get", broken_get)

    response = await client.get("/v1/recommendations/1", headers=alice_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "the server encountered a problem and could not process your request"


async def test_reservation_parent_must_exist(client, alice_headers):
    payload = {
        "title": "Rehearsal",
        "start_time": "2024-05-01T18:00:00Z",
        "end_time": "2024-05-01T19:00:00Z",
        "parent_reservation_id": 9999,
    }

    created = await client.post("/v1/reservations", json=payload, headers=alice_headers)
    assert created.status_code == 422
    assert created.json()["detail"] == {"parent_reservation_id": "must reference an existing reservation"}

    del payload["parent_reservation_id"]
    reservation = (await client.post("/v1/reservations", json=payload, headers=alice_headers)).json()["reservation"]
    updated = await client.patch(
        f"/v1/reservations/{reservation['id']}", json={"parent_reservation_id": 9999}, headers=alice_headers
    )
    assert updated.status_code == 422


async def test_validation_error_response_avoids_deprecated_status(client, alice_headers, recwarn):
    response = await client.post("/v1/recommendations", json={"artist": "Nina Simone"}, headers=alice_headers)

    assert response.status_code == 422
    assert not [w for w in recwarn if "UNPROCESSABLE_ENTITY" in str(w.message)]


async def test_get_user_by_username(client, alice_headers, bob):
    found = await client.get("/v1/users/bob", headers=alice_headers)
    missing = await client.get("/v1/users/nobody", headers=alice_headers)

    assert found.status_code == 200
    assert found.json()["user"] == {"id": bob.id, "name": "Bob", "username": "bob"}
    assert missing.status_code == 404
