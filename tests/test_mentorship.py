import random

import pytest
from fastapi import status

from conftest import MOCK_ADMIN, MOCK_OTHER_USER, MOCK_USER
from protohub.seed import JOURNEY_STEPS, MENTORS, seed_session
from protohub.services.mentorship import WELCOME_MESSAGE, analyze_lyrics, blind_audition, turn_chance

RHYMING_VERSE = "\n".join([
    "i walk the city light",
    "searching through the night",
    "every corner holds a fight",
    "still i keep my vision bright",
])


class FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__()
        self.value = value

    def random(self):
        return self.value


@pytest.mark.asyncio
async def test_list_and_get_mentors(db, client):
    await seed_session(db)

    mentors = (await client.get("/api/mentors")).json()
    assert [m["name"] for m in mentors] == [m["name"] for m in MENTORS]

    response = await client.get(f"/api/mentors/{mentors[0]['id']}")
    assert response.json()["inspired_by"] == "Kendrick Lamar"

    response = await client.get("/api/mentors/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Mentor not found"


@pytest.mark.asyncio
async def test_assign_mentor_once(db, client, login):
    await seed_session(db)
    mentor_id = (await client.get("/api/mentors")).json()[1]["id"]
    login(MOCK_USER)

    assert (await client.get("/api/me/mentor")).json() is None

    response = await client.post("/api/me/mentor", json={"mentor_id": mentor_id})
    assert response.status_code == status.HTTP_201_CREATED
    assigned = response.json()
    assert assigned["mentor"]["id"] == mentor_id
    assert assigned["progress"] == 0
    assert assigned["current_message"] == WELCOME_MESSAGE

    assert (await client.get("/api/me/mentor")).json()["mentor"]["name"] == "Nova Rae"

    response = await client.post("/api/me/mentor", json={"mentor_id": mentor_id})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "User already has a mentor assigned"

    login(MOCK_OTHER_USER)
    response = await client.post("/api/me/mentor", json={"mentor_id": 999})
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_user_journey_defaults_and_updates(db, client, login):
    await seed_session(db)
    login(MOCK_USER)

    journey = (await client.get("/api/me/journey")).json()
    assert [(s["status"], s["progress"]) for s in journey] == [(s["status"], 0) for s in JOURNEY_STEPS]

    locked = journey[2]["id"]
    response = await client.put(f"/api/me/journey/{locked}", json={"status": "in-progress", "progress": 40})
    assert response.status_code == status.HTTP_200_OK
    assert (response.json()["status"], response.json()["progress"]) == ("in-progress", 40)

    response = await client.put(f"/api/me/journey/{locked}", json={"status": "completed", "progress": 10})
    assert response.json()["progress"] == 100

    # Other users still see the shared defaults
    login(MOCK_OTHER_USER)
    assert (await client.get("/api/me/journey")).json()[2]["status"] == "locked"

    response = await client.put("/api/me/journey/999", json={"status": "completed"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    response = await client.put(f"/api/me/journey/{locked}", json={"status": "done"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_community_listings(db, client):
    await seed_session(db)

    challenges = (await client.get("/api/challenges")).json()
    assert challenges[0]["title"] == "MetroDeep Hook Challenge"
    assert challenges[0]["entries"] == 247

    assert len((await client.get("/api/collaborations")).json()) == 2
    inspiration = (await client.get("/api/inspiration")).json()
    assert any(item["mentor_id"] is None for item in inspiration)


def test_analyze_lyrics_scores_rhyme_and_vocabulary():
    result = analyze_lyrics(RHYMING_VERSE)

    assert result["overall_rating"] == 8
    assert result["strengths"] == ["varied vocabulary", "consistent rhyme scheme"]
    assert result["improvements"] == ["write longer verses to develop your ideas"]


@pytest.mark.parametrize("rating, chance", [(1, 0.0), (3, 0.0), (4, 0.25), (6, 0.25), (8, 0.5), (10, 0.75)])
def test_turn_chance(rating, chance):
    assert turn_chance(rating) == chance


@pytest.mark.asyncio
async def test_blind_audition_turns_mentors(db):
    await seed_session(db)

    result = await blind_audition(db, RHYMING_VERSE, rng=FixedRandom(0.0))
    assert len(result["mentors_turned"]) == len(MENTORS)
    assert result["feedback_text"].startswith(f"Congratulations! You've impressed {len(MENTORS)} of our mentors.")

    result = await blind_audition(db, RHYMING_VERSE, rng=FixedRandom(0.99))
    assert result["mentors_turned"] == []


@pytest.mark.asyncio
async def test_weak_audition_turns_no_one(db):
    await seed_session(db)

    result = await blind_audition(db, "yo yo yo yo", rng=FixedRandom(0.0))
    assert result["overall_rating"] <= 3
    assert result["mentors_turned"] == []
    assert result["feedback_text"].startswith("Thank you for your audition!")


@pytest.mark.asyncio
async def test_audition_endpoint(db, client):
    await seed_session(db)

    response = await client.post("/api/audition/submit", json={"lyrics": RHYMING_VERSE})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["overall_rating"] == 8

    response = await client.post("/api/audition/submit", json={"lyrics": "   "})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_artist_sync_admin_flow(db, client, login):
    await seed_session(db)
    mentor_id = (await client.get("/api/mentors")).json()[0]["id"]
    body = {"source": "spotify", "source_id": "artist-42", "priority": 2}

    login(MOCK_USER)
    response = await client.post("/api/artist-syncs", json=body)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    login(MOCK_ADMIN)
    response = await client.post("/api/artist-syncs", json=body)
    assert response.status_code == status.HTTP_201_CREATED
    sync = response.json()
    assert (sync["sync_status"], sync["sync_interval"], sync["mentor_id"]) == ("pending", "daily", None)

    response = await client.post("/api/artist-syncs", json=body)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["existing_sync"]["id"] == sync["id"]

    pending = (await client.get("/api/artist-syncs", params={"status": "pending"})).json()
    assert sync["id"] in [s["id"] for s in pending]
    assert all(s["sync_status"] == "pending" for s in pending)
    assert len((await client.get("/api/artist-syncs", params={"limit": 2})).json()) == 2

    response = await client.post(f"/api/artist-syncs/{sync['id']}/link/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Mentor not found"

    response = await client.post(f"/api/artist-syncs/{sync['id']}/link/{mentor_id}")
    assert response.json()["mentor_id"] == mentor_id


@pytest.mark.asyncio
async def test_refresh_failed_artist_sync(db, client, login):
    await seed_session(db)
    failed = (await client.get("/api/artist-syncs", params={"status": "failed"})).json()[0]
    assert failed["sync_error"] == "Artist not found at source"

    login(MOCK_ADMIN)
    refreshed = (await client.post(f"/api/artist-syncs/{failed['id']}/refresh")).json()
    assert (refreshed["sync_status"], refreshed["sync_error"]) == ("pending", None)

    response = await client.get("/api/artist-syncs/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Artist sync not found"
