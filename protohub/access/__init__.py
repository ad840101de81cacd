from protohub.access.plans import PLAN_LIMITS, PlanLimits, can_create, is_feature_available, limits_for
from protohub.access.roles import ROLE_HIERARCHY, has_role, home_route, role_level

__all__ = [
    "PLAN_LIMITS",
    "PlanLimits",
    "can_create",
    "is_feature_available",
    "limits_for",
    "ROLE_HIERARCHY",
    "has_role",
    "home_route",
    "role_level",
]
