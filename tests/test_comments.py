"""
Comment endpoint tests — covers adding comments, validation, and the
newest-first comment listing.

Comments are append-only in this API (no edit/delete endpoints), so the
test surface is focused on creation and read-through verification.
"""
import pytest
from httpx import AsyncClient


async def _create_user_and_resource(client: AsyncClient, make_user, name: str = "Reader") -> tuple[int, int]:
    user_id = await make_user(name)
    resp = await client.post("/api/v1/resources", json={
        "author_id": user_id,
        "title": "Commentable",
        "url": "http://commentable",
    })
    assert resp.status_code == 201
    return user_id, resp.json()["data"]["id"]


@pytest.mark.asyncio
async def test_add_comment(async_client: AsyncClient, make_user):
    user_id, resource_id = await _create_user_and_resource(async_client, make_user)

    resp = await async_client.post(
        f"/api/v1/resources/{resource_id}/comments",
        json={"author_id": user_id, "comment_text": "Great resource!"},
    )
    assert resp.status_code == 201
    comment = resp.json()["data"]
    assert comment["comment_text"] == "Great resource!"
    assert comment["author_id"] == user_id
    assert comment["resource_id"] == resource_id
    assert "comment_id" in comment
    assert "date_added" in comment


@pytest.mark.asyncio
async def test_list_comments_newest_first(async_client: AsyncClient, make_user):
    user_id, resource_id = await _create_user_and_resource(async_client, make_user, "Grace")

    for i in range(3):
        resp = await async_client.post(
            f"/api/v1/resources/{resource_id}/comments",
            json={"author_id": user_id, "comment_text": f"Comment {i}"},
        )
        assert resp.status_code == 201

    resp = await async_client.get(f"/api/v1/resources/{resource_id}/comments")
    assert resp.status_code == 200
    comments = resp.json()["data"]
    assert [c["comment_text"] for c in comments] == ["Comment 2", "Comment 1", "Comment 0"]
    assert all(c["name"] == "Grace" for c in comments)


@pytest.mark.asyncio
async def test_list_comments_empty(async_client: AsyncClient, make_user):
    _, resource_id = await _create_user_and_resource(async_client, make_user)
    resp = await async_client.get(f"/api/v1/resources/{resource_id}/comments")
    assert resp.status_code == 200
    assert resp.json()["data"] == []


@pytest.mark.asyncio
async def test_comment_on_nonexistent_resource(async_client: AsyncClient, make_user):
    user_id = await make_user()
    resp = await async_client.post(
        "/api/v1/resources/99999/comments",
        json={"author_id": user_id, "comment_text": "Ghost comment"},
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_comment_missing_text(async_client: AsyncClient, make_user):
    user_id, resource_id = await _create_user_and_resource(async_client, make_user)
    resp = await async_client.post(
        f"/api/v1/resources/{resource_id}/comments",
        json={"author_id": user_id},
    )
    assert resp.status_code == 422
    assert resp.json()["status"] == "fail"
