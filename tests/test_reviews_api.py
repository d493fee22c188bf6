"""HTTP-level tests for /api/reviews"""

import httpx
import pytest


async def _post_review(client: httpx.AsyncClient, headers, **overrides):
    body = {
        "animeId": "A1",
        "animeTitle": "Frieren",
        "rating": 8,
        "reviewText": "Quiet and beautiful",
        "spoilerWarning": False,
    }
    body.update(overrides)
    return await client.post("/api/reviews", json=body, headers=headers)


@pytest.mark.asyncio
async def test_health(client: httpx.AsyncClient):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_submit_then_duplicate(client: httpx.AsyncClient, auth_headers):
    response = await _post_review(client, auth_headers(1))
    assert response.status_code == 201
    review = response.json()
    assert review["id"] > 0
    assert review["userId"] == 1
    assert review["animeId"] == "A1"
    assert review["animeTitle"] == "Frieren"
    assert review["rating"] == 8
    assert review["helpfulCount"] == 0
    assert review["reported"] is False
    assert "createdAt" in review and "updatedAt" in review

    duplicate = await _post_review(client, auth_headers(1), rating=5)
    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "You have already reviewed this anime"

    mine = await client.get("/api/reviews/anime/A1/mine", headers=auth_headers(1))
    assert mine.json()["rating"] == 8


@pytest.mark.asyncio
async def test_submit_requires_token(client: httpx.AsyncClient):
    response = await _post_review(client, {})
    assert response.status_code == 401

    response = await _post_review(client, {"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 11, None])
async def test_submit_rejects_bad_rating(client: httpx.AsyncClient, auth_headers, rating):
    response = await _post_review(client, auth_headers(1), rating=rating)
    assert response.status_code == 400
    assert response.json()["detail"] == "Rating must be between 1 and 10"


@pytest.mark.asyncio
async def test_malformed_body_is_400(client: httpx.AsyncClient, auth_headers):
    response = await _post_review(client, auth_headers(1), rating="great")
    assert response.status_code == 400

    response = await client.post(
        "/api/reviews", json={"rating": 5}, headers=auth_headers(1)
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_reviews_with_optional_auth(client: httpx.AsyncClient, auth_headers):
    for user_id in (1, 2, 3):
        await _post_review(client, auth_headers(user_id), rating=user_id + 5)

    anonymous = await client.get("/api/reviews/anime/A1", params={"limit": 2})
    assert anonymous.status_code == 200
    data = anonymous.json()
    assert len(data["reviews"]) == 2
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert {"username", "avatar"} <= set(data["reviews"][0])

    # A bad token on an optional route is ignored
    with_bad_token = await client.get(
        "/api/reviews/anime/A1", headers={"Authorization": "Bearer broken"}
    )
    assert with_bad_token.status_code == 200
    assert with_bad_token.json()["pagination"]["total"] == 3

    page_two = await client.get(
        "/api/reviews/anime/A1", params={"page": 2, "limit": 2, "sortBy": "helpful"}
    )
    assert len(page_two.json()["reviews"]) == 1


@pytest.mark.asyncio
async def test_list_rejects_bad_pagination(client: httpx.AsyncClient):
    response = await client.get("/api/reviews/anime/A1", params={"page": 0})
    assert response.status_code == 400
    response = await client.get("/api/reviews/anime/A1", params={"limit": 0})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_mine_not_found(client: httpx.AsyncClient, auth_headers):
    response = await client.get("/api/reviews/anime/A1/mine", headers=auth_headers(2))
    assert response.status_code == 404

    response = await client.get("/api/reviews/anime/A1/mine")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_update_review(client: httpx.AsyncClient, auth_headers):
    review_id = (await _post_review(client, auth_headers(1))).json()["id"]

    forbidden = await client.put(
        f"/api/reviews/{review_id}", json={"rating": 1}, headers=auth_headers(2)
    )
    assert forbidden.status_code == 403

    missing = await client.put(
        "/api/reviews/9999", json={"rating": 1}, headers=auth_headers(1)
    )
    assert missing.status_code == 404

    updated = await client.put(
        f"/api/reviews/{review_id}",
        json={"rating": 10, "reviewText": "Masterpiece", "spoilerWarning": True},
        headers=auth_headers(1),
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["rating"] == 10
    assert body["reviewText"] == "Masterpiece"
    assert body["spoilerWarning"] is True


@pytest.mark.asyncio
async def test_delete_review(client: httpx.AsyncClient, auth_headers):
    review_id = (await _post_review(client, auth_headers(1))).json()["id"]
    await client.post(
        f"/api/reviews/{review_id}/vote", json={"helpful": True}, headers=auth_headers(2)
    )

    forbidden = await client.delete(f"/api/reviews/{review_id}", headers=auth_headers(2))
    assert forbidden.status_code == 403

    deleted = await client.delete(f"/api/reviews/{review_id}", headers=auth_headers(1))
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Review deleted successfully"

    again = await client.delete(f"/api/reviews/{review_id}", headers=auth_headers(1))
    assert again.status_code == 404

    mine = await client.get("/api/reviews/anime/A1/mine", headers=auth_headers(1))
    assert mine.status_code == 404


@pytest.mark.asyncio
async def test_vote_flip(client: httpx.AsyncClient, auth_headers):
    review_id = (await _post_review(client, auth_headers(1))).json()["id"]

    first = await client.post(
        f"/api/reviews/{review_id}/vote", json={"helpful": True}, headers=auth_headers(2)
    )
    assert first.status_code == 200
    assert first.json()["helpfulCount"] == 1

    second = await client.post(
        f"/api/reviews/{review_id}/vote", json={"helpful": False}, headers=auth_headers(2)
    )
    assert second.json()["helpfulCount"] == 0

    listing = await client.get("/api/reviews/anime/A1")
    assert listing.json()["reviews"][0]["helpfulCount"] == 0


@pytest.mark.asyncio
async def test_vote_requires_helpful_flag(client: httpx.AsyncClient, auth_headers):
    review_id = (await _post_review(client, auth_headers(1))).json()["id"]
    response = await client.post(
        f"/api/reviews/{review_id}/vote", json={}, headers=auth_headers(2)
    )
    assert response.status_code == 400

    missing = await client.post(
        "/api/reviews/4040/vote", json={"helpful": True}, headers=auth_headers(2)
    )
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_report_review(client: httpx.AsyncClient, auth_headers):
    review_id = (await _post_review(client, auth_headers(1))).json()["id"]

    response = await client.post(
        f"/api/reviews/{review_id}/report", headers=auth_headers(3)
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Review reported successfully"

    mine = await client.get("/api/reviews/anime/A1/mine", headers=auth_headers(1))
    assert mine.json()["reported"] is True

    missing = await client.post("/api/reviews/4040/report", headers=auth_headers(3))
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_rating_stats(client: httpx.AsyncClient, auth_headers):
    empty = await client.get("/api/reviews/anime/A1/stats")
    assert empty.status_code == 200
    assert empty.json() == {"averageRating": "0.0", "totalReviews": 0}

    await _post_review(client, auth_headers(1), rating=9)
    await _post_review(client, auth_headers(2), rating=6)

    stats = await client.get("/api/reviews/anime/A1/stats")
    assert stats.json() == {"averageRating": "7.5", "totalReviews": 2}


@pytest.mark.asyncio
async def test_user_reviews(client: httpx.AsyncClient, auth_headers):
    for anime_id in ("A1", "A2", "A3"):
        await _post_review(client, auth_headers(2), animeId=anime_id)
    await _post_review(client, auth_headers(1), animeId="A1")

    response = await client.get("/api/reviews/user/2", params={"limit": 2})
    assert response.status_code == 200
    data = response.json()
    assert len(data["reviews"]) == 2
    assert all(r["userId"] == 2 for r in data["reviews"])
    assert "username" not in data["reviews"][0]
    assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
