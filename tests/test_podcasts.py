import xml.etree.ElementTree as ET

import pytest
from fastapi import status

from conftest import MOCK_OTHER_USER, MOCK_PRO_USER, MOCK_USER
from protohub.services.podcasts import ITUNES_NS


async def create_podcast(client, **fields):
    body = {"title": "Lagos Tech Talk", "description": "Startups and code", "category": "Technology", "is_published": True}
    body.update(fields)
    response = await client.post("/api/podcasts", json=body)
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()


async def create_episode(client, podcast_id, **fields):
    body = {"podcast_id": podcast_id, "title": "Pilot", "audio_url": "/uploads/pilot.mp3", "is_published": True}
    body.update(fields)
    return await client.post("/api/episodes", json=body)


@pytest.mark.asyncio
async def test_create_podcast_and_episode(client, login):
    login(MOCK_USER)
    podcast = await create_podcast(client)
    assert podcast["creator_id"] == MOCK_USER["id"]

    response = await create_episode(client, podcast["id"], episode_number=1, duration=1800)
    assert response.status_code == status.HTTP_201_CREATED
    episode = response.json()
    assert episode["published_at"] is not None
    assert episode["play_count"] == 0

    detail = (await client.get(f"/api/podcasts/{podcast['id']}")).json()
    assert detail["episode_count"] == 1
    assert [e["id"] for e in detail["episodes"]] == [episode["id"]]


@pytest.mark.asyncio
async def test_only_owner_adds_episodes(client, login):
    login(MOCK_USER)
    podcast = await create_podcast(client)

    login(MOCK_OTHER_USER)
    response = await create_episode(client, podcast["id"])
    assert response.status_code == status.HTTP_403_FORBIDDEN
    response = await client.put(f"/api/podcasts/{podcast['id']}", json={"title": "Mine now"})
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = await create_episode(client, 999)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_drafts_are_hidden_from_other_users(client, login):
    login(MOCK_USER)
    draft = await create_podcast(client, is_published=False)
    live = await create_podcast(client, title="Live Show")
    hidden = (await create_episode(client, live["id"], is_published=False)).json()

    assert (await client.get(f"/api/podcasts/{draft['id']}")).status_code == status.HTTP_200_OK
    owner_view = (await client.get(f"/api/podcasts/{live['id']}")).json()
    assert [e["id"] for e in owner_view["episodes"]] == [hidden["id"]]
    assert owner_view["episode_count"] == 0

    login(MOCK_OTHER_USER)
    assert (await client.get(f"/api/podcasts/{draft['id']}")).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.get(f"/api/podcasts/{live['id']}")).json()["episodes"] == []
    assert (await client.get(f"/api/episodes/{hidden['id']}")).status_code == status.HTTP_404_NOT_FOUND
    assert [p["id"] for p in (await client.get("/api/podcasts/featured")).json()] == [live["id"]]


@pytest.mark.asyncio
async def test_publishing_an_episode_sets_published_at(client, login):
    login(MOCK_USER)
    podcast = await create_podcast(client)
    episode = (await create_episode(client, podcast["id"], is_published=False)).json()
    assert episode["published_at"] is None

    response = await client.put(f"/api/episodes/{episode['id']}", json={"is_published": True})
    assert response.json()["published_at"] is not None

    response = await client.put(f"/api/episodes/{episode['id']}", json={"audio_url": None})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_search_and_category(client, login):
    login(MOCK_USER)
    tech = await create_podcast(client)
    await create_podcast(client, title="Kitchen Stories", description="Food from 100% home cooks", category="Food")

    assert (await client.get("/api/podcasts/search", params={"q": " "})).status_code == status.HTTP_400_BAD_REQUEST
    found = (await client.get("/api/podcasts/search", params={"q": "STARTUPS"})).json()
    assert [p["id"] for p in found] == [tech["id"]]
    assert (await client.get("/api/podcasts/search", params={"q": "%"})).json()[0]["title"] == "Kitchen Stories"

    food = (await client.get("/api/podcasts/category/food")).json()
    assert [p["title"] for p in food] == ["Kitchen Stories"]


@pytest.mark.asyncio
async def test_creator_listing_is_private(client, login):
    login(MOCK_USER)
    await create_podcast(client, is_published=False)

    mine = (await client.get(f"/api/podcasts/creator/{MOCK_USER['id']}")).json()
    assert len(mine) == 1
    response = await client.get(f"/api/podcasts/creator/{MOCK_OTHER_USER['id']}")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_follow_and_unfollow(client, login):
    login(MOCK_USER)
    podcast = await create_podcast(client)

    login(MOCK_OTHER_USER)
    response = await client.post("/api/follows", json={"podcast_id": podcast["id"]})
    assert response.status_code == status.HTTP_201_CREATED
    response = await client.post("/api/follows", json={"podcast_id": podcast["id"]})
    assert response.status_code == status.HTTP_409_CONFLICT
    response = await client.post("/api/follows", json={"podcast_id": 999})
    assert response.status_code == status.HTTP_404_NOT_FOUND

    assert (await client.get(f"/api/follows/{podcast['id']}/status")).json() == {"is_following": True}
    followed = (await client.get("/api/follows")).json()
    assert [(p["id"], p["follow_count"]) for p in followed] == [(podcast["id"], 1)]

    response = await client.delete(f"/api/follows/{podcast['id']}")
    assert response.json() == {"message": "Unfollowed successfully"}
    assert (await client.get(f"/api/follows/{podcast['id']}/status")).json() == {"is_following": False}


@pytest.mark.asyncio
async def test_plays_and_history(client, login):
    login(MOCK_USER)
    podcast = await create_podcast(client)
    episode = (await create_episode(client, podcast["id"])).json()

    login(MOCK_OTHER_USER)
    response = await client.post(f"/api/episodes/{episode['id']}/play")
    assert response.json() == {"message": "Play count incremented"}
    assert (await client.get(f"/api/episodes/{episode['id']}")).json()["play_count"] == 1

    await client.post("/api/play-history", json={"episode_id": episode["id"], "progress": 60})
    await client.post("/api/play-history", json={"episode_id": episode["id"], "progress": 1800, "completed": True})
    history = (await client.get("/api/play-history")).json()
    assert len(history) == 1
    assert (history[0]["progress"], history[0]["completed"]) == (1800, True)
    assert history[0]["podcast_title"] == "Lagos Tech Talk"

    response = await client.post("/api/play-history", json={"episode_id": 999})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    response = await client.post("/api/episodes/999/play")
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_analytics_requires_plan_feature(client, login):
    login(MOCK_USER)
    podcast = await create_podcast(client)

    response = await client.get(f"/api/podcasts/{podcast['id']}/analytics")
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == {
        "message": "Feature not available on your plan",
        "feature": "has_advanced_analytics",
        "plan": "free",
        "upgrade_required": True,
    }


@pytest.mark.asyncio
async def test_analytics_for_pro_owner(client, login):
    login(MOCK_PRO_USER)
    podcast = await create_podcast(client)
    episode = (await create_episode(client, podcast["id"])).json()
    await client.post(f"/api/episodes/{episode['id']}/play")
    await client.post("/api/play-history", json={"episode_id": episode["id"], "completed": True})

    login(MOCK_OTHER_USER)
    await client.post("/api/follows", json={"podcast_id": podcast["id"]})

    login(MOCK_PRO_USER)
    response = await client.get(f"/api/podcasts/{podcast['id']}/analytics")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"total_plays": 1, "total_follows": 1, "episode_count": 1, "completed_listens": 1}

    # Pro plan does not grant access to someone else's show
    login({**MOCK_OTHER_USER, "plan": "pro"})
    response = await client.get(f"/api/podcasts/{podcast['id']}/analytics")
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_rss_feed(client, login):
    login(MOCK_USER)
    podcast = await create_podcast(client, cover_image_url="/uploads/cover.jpg")
    episode = (await create_episode(client, podcast["id"], duration=95)).json()
    await create_episode(client, podcast["id"], title="Unreleased", is_published=False)

    response = await client.get(f"/api/podcasts/{podcast['id']}/rss")
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("application/rss+xml")

    channel = ET.fromstring(response.content).find("channel")
    assert channel.findtext("title") == "Lagos Tech Talk"
    assert channel.find(f"{{{ITUNES_NS}}}image").get("href") == "http://test/uploads/cover.jpg"
    assert channel.find(f"{{{ITUNES_NS}}}category").get("text") == "Technology"

    items = channel.findall("item")
    assert [item.findtext("title") for item in items] == ["Pilot"]
    assert items[0].find("enclosure").get("url") == "http://test/uploads/pilot.mp3"
    assert items[0].findtext("guid") == f"episode-{episode['id']}"
    assert items[0].findtext(f"{{{ITUNES_NS}}}duration") == "95"
    assert items[0].findtext("pubDate").endswith("GMT")


@pytest.mark.asyncio
async def test_rss_feed_requires_published_podcast(client, login):
    login(MOCK_USER)
    draft = await create_podcast(client, is_published=False)

    assert (await client.get(f"/api/podcasts/{draft['id']}/rss")).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.get("/api/podcasts/999/rss")).status_code == status.HTTP_404_NOT_FOUND
