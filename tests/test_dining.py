from datetime import timedelta

import pytest
from fastapi import status

from conftest import MOCK_ADMIN, MOCK_OTHER_USER, MOCK_USER
from protohub.seed import CULTURAL_INSIGHTS, FOOD_ORIGIN_STORIES, RESTAURANTS, seed_session
from protohub.utils.dates import utcnow


async def restaurant_named(client, name):
    return next(r for r in (await client.get("/api/restaurants")).json() if r["name"] == name)


def reservation_body(restaurant_id, days=3, **fields):
    body = {"restaurant_id": restaurant_id, "date": (utcnow() + timedelta(days=days)).isoformat(), "party_size": 4}
    body.update(fields)
    return body


@pytest.mark.asyncio
async def test_restaurant_listings(db, client):
    await seed_session(db)

    restaurants = (await client.get("/api/restaurants")).json()
    assert [r["name"] for r in restaurants] == [r["name"] for r in RESTAURANTS]

    tagine = await restaurant_named(client, "Tagine House")
    assert (await client.get(f"/api/restaurants/{tagine['id']}")).json()["city"] == "Marrakesh"

    response = await client.get("/api/restaurants/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Restaurant not found"

    by_cuisine = (await client.get("/api/restaurants/cuisine/nigerian")).json()
    assert [r["name"] for r in by_cuisine] == ["Lagos Kitchen"]
    by_city = (await client.get("/api/restaurants/city/ACC")).json()
    assert [r["name"] for r in by_city] == ["Accra Flavors"]
    assert (await client.get("/api/restaurants/city/_")).json() == []


@pytest.mark.asyncio
async def test_menu_and_featured_items(db, client):
    await seed_session(db)
    tagine = await restaurant_named(client, "Tagine House")

    menu = (await client.get(f"/api/restaurants/{tagine['id']}/menu")).json()
    assert [item["name"] for item in menu] == ["Lamb Tagine", "Chicken Pastilla"]
    featured = (await client.get(f"/api/restaurants/{tagine['id']}/menu/featured")).json()
    assert [item["name"] for item in featured] == ["Lamb Tagine"]

    assert (await client.get("/api/restaurants/999/menu")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_review_updates_rating(db, client, login):
    await seed_session(db)
    accra = await restaurant_named(client, "Accra Flavors")
    login(MOCK_USER)

    response = await client.post("/api/reviews", json={"restaurant_id": accra["id"], "rating": 5, "comment": " Great waakye "})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["comment"] == "Great waakye"

    login(MOCK_OTHER_USER)
    await client.post("/api/reviews", json={"restaurant_id": accra["id"], "rating": 4})
    await client.post("/api/reviews", json={"restaurant_id": accra["id"], "rating": 4})

    updated = (await client.get(f"/api/restaurants/{accra['id']}")).json()
    assert (updated["rating"], updated["review_count"]) == (4.3, 3)
    assert len((await client.get(f"/api/restaurants/{accra['id']}/reviews")).json()) == 3
    assert len((await client.get("/api/me/reviews")).json()) == 2


@pytest.mark.asyncio
async def test_review_validation(db, client, login):
    await seed_session(db)
    accra = await restaurant_named(client, "Accra Flavors")
    login(MOCK_USER)

    response = await client.post("/api/reviews", json={"restaurant_id": accra["id"], "rating": 6})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    response = await client.post("/api/reviews", json={"restaurant_id": 999, "rating": 3})
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_reservations(db, client, login):
    await seed_session(db)
    lagos = await restaurant_named(client, "Lagos Kitchen")
    login(MOCK_USER)

    response = await client.post("/api/reservations", json=reservation_body(lagos["id"], special_requests="Window seat"))
    assert response.status_code == status.HTTP_201_CREATED
    reservation = response.json()
    assert reservation["status"] == "pending"
    assert [r["id"] for r in (await client.get("/api/me/reservations")).json()] == [reservation["id"]]

    response = await client.post("/api/reservations", json=reservation_body(lagos["id"], days=-1))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Reservation date must be in the future"
    response = await client.post("/api/reservations", json=reservation_body(999))
    assert response.status_code == status.HTTP_404_NOT_FOUND
    response = await client.post("/api/reservations", json=reservation_body(lagos["id"], party_size=0))
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_reservation_status_changes(db, client, login):
    await seed_session(db)
    lagos = await restaurant_named(client, "Lagos Kitchen")
    login(MOCK_USER)
    reservation = (await client.post("/api/reservations", json=reservation_body(lagos["id"]))).json()
    url = f"/api/reservations/{reservation['id']}/status"

    response = await client.patch(url, json={"status": "pending"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    login(MOCK_OTHER_USER)
    assert (await client.patch(url, json={"status": "cancelled"})).status_code == status.HTTP_404_NOT_FOUND

    login(MOCK_ADMIN)
    assert (await client.patch(url, json={"status": "confirmed"})).json()["status"] == "confirmed"

    login(MOCK_USER)
    assert (await client.patch(url, json={"status": "cancelled"})).json()["status"] == "cancelled"
    response = await client.patch(url, json={"status": "completed"})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Reservation is already cancelled"


@pytest.mark.asyncio
async def test_cultural_insights(db, client):
    await seed_session(db)

    insights = (await client.get("/api/cultural-insights")).json()
    assert len(insights) == len(CULTURAL_INSIGHTS)
    assert (await client.get(f"/api/cultural-insights/{insights[0]['id']}")).json()["cuisine_type"] == "Ethiopian"
    assert len((await client.get("/api/cultural-insights/cuisine/moroccan")).json()) == 1

    response = await client.get("/api/cultural-insights/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Cultural insight not found"


@pytest.mark.asyncio
async def test_food_origin_stories(db, client, login):
    await seed_session(db)

    stories = (await client.get("/api/food-origin-stories")).json()
    assert len(stories) == len(FOOD_ORIGIN_STORIES)
    assert [s["dish_name"] for s in (await client.get("/api/food-origin-stories/dish/jollof")).json()] == ["Jollof Rice"]
    assert len((await client.get("/api/food-origin-stories/cuisine/Ethiopian")).json()) == 1
    assert (await client.get("/api/food-origin-stories/999")).status_code == status.HTTP_404_NOT_FOUND

    story = {"dish_name": "Bunny Chow", "cuisine_type": "South African", "country": "South Africa",
             "story_content": "A hollowed loaf filled with curry, born in Durban."}
    login(MOCK_USER)
    assert (await client.post("/api/food-origin-stories", json=story)).status_code == status.HTTP_403_FORBIDDEN

    login(MOCK_ADMIN)
    response = await client.post("/api/food-origin-stories", json=story)
    assert response.status_code == status.HTTP_201_CREATED
    created = (await client.get(f"/api/food-origin-stories/{response.json()['id']}")).json()
    assert created["dish_name"] == "Bunny Chow"
    assert len((await client.get("/api/food-origin-stories/cuisine/south african")).json()) == 2
