"""
Breath sample evaluation and alcohol metabolism estimates.

The evaluation is a deterministic stand-in for real audio analysis: the same
sample always yields the same BAC reading.
"""
import math
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.models.breath import BreathTest
from protohub.schemas.breath import BreathResult, SafetyLevel, Sex

logger = get_logger()

SAMPLE_PREFIX = 100
SAFE_LIMIT = 0.03
LEGAL_LIMIT = 0.08
BASE_ELIMINATION_RATE = {Sex.male: 0.015, Sex.female: 0.017}
REFERENCE_WEIGHT_KG = 70
CURVE_STEP_HOURS = 0.5

MESSAGES = {
    SafetyLevel.safe: "Clear: You are good to go. Drive safely!",
    SafetyLevel.warning: (
        "Caution: You are below the legal limit, but alcohol is affecting you. "
        "Consider waiting before driving."
    ),
    SafetyLevel.danger: "Warning: Do not drive. Your estimated BAC is above the legal limit.",
}


def sample_hash(sample: str) -> int:
    """Signed 32-bit ``h * 31 + code`` rolling hash of the first 100 characters."""
    h = 0
    for char in sample[:SAMPLE_PREFIX]:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def classify(bac: float) -> SafetyLevel:
    if bac < SAFE_LIMIT:
        return SafetyLevel.safe
    if bac < LEGAL_LIMIT:
        return SafetyLevel.warning
    return SafetyLevel.danger


def evaluate_breath_sample(audio_sample: str) -> BreathResult:
    bac = (abs(sample_hash(audio_sample)) % 20) / 100
    level = classify(bac)
    return BreathResult(bac=f"{bac:.2f}", level=level, message=MESSAGES[level])


async def save_breath_test(
    db: AsyncSession,
    user_id: str,
    result: BreathResult,
    audio_sample: str,
    location: Optional[str] = None,
) -> BreathTest:
    test = BreathTest(
        user_id=user_id,
        bac=float(result.bac),
        level=result.level.value,
        message=result.message,
        location=location,
        audio_sample=audio_sample,
    )
    db.add(test)
    await db.commit()
    await db.refresh(test)
    logger.info("Breath test stored", test_id=test.id, user_id=user_id, level=test.level)
    return test


async def list_breath_history(db: AsyncSession, user_id: str) -> List[BreathTest]:
    result = await db.execute(
        select(BreathTest)
        .where(BreathTest.user_id == user_id)
        .order_by(BreathTest.created_at.desc(), BreathTest.id.desc())
    )
    return list(result.scalars().all())


async def get_owned_breath_test(db: AsyncSession, test_id: int, user_id: str) -> Optional[BreathTest]:
    test = await db.get(BreathTest, test_id)
    if test is None or test.user_id != user_id:
        return None
    return test


def metabolism(bac: float, weight_kg: float = REFERENCE_WEIGHT_KG, sex: Sex = Sex.male) -> dict:
    """Linear elimination estimate scaled by body weight."""
    rate = round(BASE_ELIMINATION_RATE[Sex(sex)] * (0.8 + 0.4 * weight_kg / REFERENCE_WEIGHT_KG), 4)
    hours = bac / rate if bac > 0 else 0.0

    steps = int(math.ceil(hours) / CURVE_STEP_HOURS)
    curve = []
    for step in range(steps + 1):
        t = step * CURVE_STEP_HOURS
        curve.append({"time": t, "bac": round(max(0.0, bac - rate * t), 3)})

    return {"rate": rate, "hours_to_sober": round(hours, 2), "curve": curve}
