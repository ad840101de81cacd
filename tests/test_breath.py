import pytest
from fastapi import status

from conftest import MOCK_OTHER_USER, MOCK_USER
from protohub.schemas.breath import SafetyLevel
from protohub.services.breath import MESSAGES, evaluate_breath_sample, metabolism, sample_hash


@pytest.mark.parametrize(
    "sample, bac, level",
    [
        ("(", "0.00", SafetyLevel.safe),      # 40 % 20 == 0
        ("A", "0.05", SafetyLevel.warning),   # 65 % 20 == 5
        ("ab", "0.05", SafetyLevel.warning),  # 97 * 31 + 98 == 3105
        ("a", "0.17", SafetyLevel.danger),    # 97 % 20 == 17
    ],
)
def test_evaluate_breath_sample(sample, bac, level):
    result = evaluate_breath_sample(sample)
    assert result.bac == bac
    assert result.level == level
    assert result.message == MESSAGES[level]


def test_hash_wraps_to_signed_32_bit():
    h = sample_hash("z" * 100)
    assert -2 ** 31 <= h < 2 ** 31


def test_only_first_100_characters_count():
    prefix = "UklGRiQAAABXQVZFZm10IBAAAAABAAEA" * 4
    assert evaluate_breath_sample(prefix[:100] + "tail") == evaluate_breath_sample(prefix[:100] + "other tail")


def test_metabolism_male_reference_weight():
    result = metabolism(0.08, 70, "male")
    assert result["rate"] == 0.018
    assert result["hours_to_sober"] == 4.44
    curve = result["curve"]
    assert len(curve) == 11
    assert curve[0] == {"time": 0.0, "bac": 0.08}
    assert curve[2] == {"time": 1.0, "bac": 0.062}
    assert curve[-1] == {"time": 5.0, "bac": 0.0}


def test_metabolism_scales_with_weight_and_sex():
    assert metabolism(0.08, 70, "female")["rate"] == 0.0204
    assert metabolism(0.08, 140, "male")["rate"] == 0.024


def test_metabolism_sober():
    result = metabolism(0.0)
    assert result["hours_to_sober"] == 0
    assert result["curve"] == [{"time": 0.0, "bac": 0.0}]


@pytest.mark.asyncio
async def test_scan_anonymous_is_not_stored(client, login):
    response = await client.post("/api/breath/scan", json={"audio_sample": "a"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"bac": "0.17", "level": "danger", "message": MESSAGES[SafetyLevel.danger]}

    login(MOCK_USER)
    assert (await client.get("/api/breath/history")).json() == []


@pytest.mark.asyncio
async def test_scan_rejects_empty_sample(client):
    response = await client.post("/api/breath/scan", json={"audio_sample": ""})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_scan_history_and_lookup(client, login):
    login(MOCK_USER)
    await client.post("/api/breath/scan", json={"audio_sample": "(", "location": "Accra"})
    await client.post("/api/breath/scan", json={"audio_sample": "a"})

    history = (await client.get("/api/breath/history")).json()
    assert [t["level"] for t in history] == ["danger", "safe"]
    assert history[1]["location"] == "Accra"

    one = await client.get(f"/api/breath/{history[0]['id']}")
    assert one.status_code == status.HTTP_200_OK
    assert one.json()["bac"] == 0.17

    login(MOCK_OTHER_USER)
    hidden = await client.get(f"/api/breath/{history[0]['id']}")
    assert hidden.status_code == status.HTTP_404_NOT_FOUND
    assert hidden.json()["detail"] == "Breath test not found"


@pytest.mark.asyncio
async def test_metabolism_endpoint(client):
    response = await client.post("/api/breath/metabolism", json={"bac": 0.05, "sex": "female"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["rate"] == 0.0204

    invalid = await client.post("/api/breath/metabolism", json={"bac": -0.1})
    assert invalid.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert (await client.post("/api/breath/metabolism", json={"bac": 0.1, "weight_kg": 0})).status_code == 422


@pytest.mark.asyncio
async def test_metabolism_bac_upper_bound(client):
    highest = await client.post("/api/breath/metabolism", json={"bac": 1.0})
    assert highest.status_code == status.HTTP_200_OK
    assert highest.json()["curve"][-1]["bac"] == 0.0

    response = await client.post("/api/breath/metabolism", json={"bac": 1.01})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert (await client.post("/api/breath/metabolism", json={"bac": 1e9})).status_code == 422
