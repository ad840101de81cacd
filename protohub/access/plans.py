from typing import Dict, Optional

from pydantic import BaseModel

UNLIMITED = -1


class PlanLimits(BaseModel):
    max_projects: int
    max_tasks_per_project: int
    has_file_uploads: bool
    has_team_collaboration: bool
    has_advanced_analytics: bool
    has_ai_assistant: bool
    has_priority_support: bool


PLAN_LIMITS: Dict[str, PlanLimits] = {
    "free": PlanLimits(
        max_projects=2,
        max_tasks_per_project=50,
        has_file_uploads=False,
        has_team_collaboration=False,
        has_advanced_analytics=False,
        has_ai_assistant=False,
        has_priority_support=False,
    ),
    "pro": PlanLimits(
        max_projects=UNLIMITED,
        max_tasks_per_project=UNLIMITED,
        has_file_uploads=True,
        has_team_collaboration=True,
        has_advanced_analytics=True,
        has_ai_assistant=True,
        has_priority_support=False,
    ),
    "premium": PlanLimits(
        max_projects=UNLIMITED,
        max_tasks_per_project=UNLIMITED,
        has_file_uploads=True,
        has_team_collaboration=True,
        has_advanced_analytics=True,
        has_ai_assistant=True,
        has_priority_support=True,
    ),
    "team": PlanLimits(
        max_projects=UNLIMITED,
        max_tasks_per_project=UNLIMITED,
        has_file_uploads=True,
        has_team_collaboration=True,
        has_advanced_analytics=True,
        has_ai_assistant=True,
        has_priority_support=True,
    ),
}

DEFAULT_PLAN = "free"


def normalize_plan(plan: Optional[str]) -> str:
    if not plan:
        return DEFAULT_PLAN
    plan = plan.strip().lower()
    return plan if plan in PLAN_LIMITS else DEFAULT_PLAN


def limits_for(plan: Optional[str]) -> PlanLimits:
    return PLAN_LIMITS[normalize_plan(plan)]


def is_feature_available(limits: PlanLimits, feature: str) -> bool:
    value = getattr(limits, feature)
    # bool is an int subclass; only a real -1 limit counts as unlimited
    return value is True or (not isinstance(value, bool) and value == UNLIMITED)


def can_create(current_count: int, limit: int) -> bool:
    return limit == UNLIMITED or current_count < limit


def is_pro(plan: Optional[str]) -> bool:
    return normalize_plan(plan) in ("pro", "team")


def is_team(plan: Optional[str]) -> bool:
    return normalize_plan(plan) == "team"


def is_premium(plan: Optional[str]) -> bool:
    return normalize_plan(plan) in ("pro", "team", "premium")
