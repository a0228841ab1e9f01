"""
Vote endpoint tests — like/dislike status, casting, replacing and
removing a vote, and the counts they produce on resource reads.
"""
import pytest
from httpx import AsyncClient


async def _setup(client: AsyncClient, make_user) -> tuple[int, int]:
    author_id = await make_user("Author")
    voter_id = await make_user("Voter")
    resp = await client.post("/api/v1/resources", json={
        "author_id": author_id,
        "title": "Votable",
        "url": "http://votable",
    })
    return resp.json()["data"]["id"], voter_id


@pytest.mark.asyncio
async def test_like_shows_in_resource_counts(async_client: AsyncClient, make_user):
    resource_id, voter_id = await _setup(async_client, make_user)

    resp = await async_client.post(f"/api/v1/resources/{resource_id}/likes/{voter_id}", json={"liked": True})
    assert resp.status_code == 201
    assert resp.json()["data"]["liked"] is True

    detail = (await async_client.get(f"/api/v1/resources/{resource_id}")).json()["data"]
    assert detail["likes"] == 1
    assert detail["dislikes"] == 0


@pytest.mark.asyncio
async def test_vote_status(async_client: AsyncClient, make_user):
    resource_id, voter_id = await _setup(async_client, make_user)
    url = f"/api/v1/resources/{resource_id}/likes/{voter_id}"

    resp = await async_client.get(url)
    assert resp.status_code == 404
    assert resp.json()["status"] == "not found"
    assert resp.json()["data"] is None

    await async_client.post(url, json={"liked": False})
    resp = await async_client.get(url)
    assert resp.status_code == 200
    assert resp.json()["data"] is False


@pytest.mark.asyncio
async def test_changing_vote_replaces_it(async_client: AsyncClient, make_user):
    resource_id, voter_id = await _setup(async_client, make_user)
    url = f"/api/v1/resources/{resource_id}/likes/{voter_id}"

    await async_client.post(url, json={"liked": True})
    await async_client.post(url, json={"liked": False})

    detail = (await async_client.get(f"/api/v1/resources/{resource_id}")).json()["data"]
    assert detail["likes"] == 0
    assert detail["dislikes"] == 1


@pytest.mark.asyncio
async def test_remove_vote(async_client: AsyncClient, make_user):
    resource_id, voter_id = await _setup(async_client, make_user)
    url = f"/api/v1/resources/{resource_id}/likes/{voter_id}"
    await async_client.post(url, json={"liked": True})

    resp = await async_client.delete(url)
    assert resp.status_code == 200
    assert resp.json()["data"]["author_id"] == voter_id

    resp = await async_client.delete(url)
    assert resp.status_code == 404

    detail = (await async_client.get(f"/api/v1/resources/{resource_id}")).json()["data"]
    assert detail["likes"] == 0


@pytest.mark.asyncio
async def test_vote_on_missing_resource(async_client: AsyncClient, make_user):
    voter_id = await make_user()
    resp = await async_client.post(f"/api/v1/resources/99999/likes/{voter_id}", json={"liked": True})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_vote_requires_liked_flag(async_client: AsyncClient, make_user):
    resource_id, voter_id = await _setup(async_client, make_user)
    resp = await async_client.post(f"/api/v1/resources/{resource_id}/likes/{voter_id}", json={})
    assert resp.status_code == 422
