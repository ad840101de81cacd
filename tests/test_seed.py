import pytest

from protohub.models.dining import MenuItem, Restaurant, Review
from protohub.models.homeservices import Professional, Service, ServiceTestimonial
from protohub.models.learning import Course, Lesson, Subject
from protohub.models.mentorship import ArtistSync, InspirationItem, Mentor
from protohub.models.stays import Destination, Property, Testimonial
from protohub.models.trends import Trend
from protohub.seed import (
    ARTIST_SYNCS,
    COURSES,
    LESSONS,
    MENTORS,
    MENU_ITEMS,
    PROPERTIES,
    RESTAURANTS,
    SERVICES,
    TESTIMONIALS,
    TRENDS,
    seed_session,
)


@pytest.mark.asyncio
async def test_seed_fills_empty_tables(db):
    inserted = await seed_session(db)

    assert inserted[Property.__tablename__] == len(PROPERTIES)
    assert inserted[Service.__tablename__] == len(SERVICES)
    assert inserted[Trend.__tablename__] == len(TRENDS)
    assert inserted[Testimonial.__tablename__] == len(TESTIMONIALS)
    assert inserted[Mentor.__tablename__] == len(MENTORS)
    assert inserted[ArtistSync.__tablename__] == len(ARTIST_SYNCS)
    assert inserted[Course.__tablename__] == len(COURSES)
    assert inserted[Lesson.__tablename__] == len(LESSONS)
    assert inserted[Restaurant.__tablename__] == len(RESTAURANTS)
    assert inserted[MenuItem.__tablename__] == len(MENU_ITEMS)
    assert {
        Destination.__tablename__,
        Professional.__tablename__,
        ServiceTestimonial.__tablename__,
        InspirationItem.__tablename__,
        Subject.__tablename__,
        Review.__tablename__,
    } <= set(inserted)


@pytest.mark.asyncio
async def test_seed_is_idempotent(db):
    await seed_session(db)
    assert await seed_session(db) == {}


@pytest.mark.asyncio
async def test_seeded_data_is_served(db, client):
    await seed_session(db)

    properties = (await client.get("/api/properties")).json()
    assert len(properties) == len(PROPERTIES)

    testimonials = (await client.get("/api/testimonials")).json()
    property_ids = {p["id"] for p in properties}
    assert all(t["property_id"] in property_ids for t in testimonials)

    services = (await client.get("/api/services")).json()
    assert len(services) == len(SERVICES)


@pytest.mark.asyncio
async def test_seeded_children_point_at_seeded_parents(db, client):
    await seed_session(db)

    courses = (await client.get("/api/courses")).json()
    subject_ids = {s["id"] for s in (await client.get("/api/subjects")).json()}
    assert len(courses) == len(COURSES)
    assert all(c["subject_id"] in subject_ids for c in courses)

    algebra = (await client.get(f"/api/courses/{courses[0]['id']}")).json()
    assert [lesson["order"] for lesson in algebra["lessons"]] == [1, 2, 3]

    mentor_ids = {m["id"] for m in (await client.get("/api/mentors")).json()}
    syncs = (await client.get("/api/artist-syncs")).json()
    assert {s["mentor_id"] for s in syncs} - {None} <= mentor_ids

    restaurants = (await client.get("/api/restaurants")).json()
    menu = (await client.get(f"/api/restaurants/{restaurants[0]['id']}/menu")).json()
    assert [item["name"] for item in menu] == ["Doro Wat", "Veggie Combo"]
