from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status

from protohub.access.plans import PLAN_LIMITS, PlanLimits, is_premium, is_pro, is_team, limits_for
from protohub.access.roles import home_route
from protohub.dependencies.auth import get_current_user
from protohub.schemas.access import MeResponse

router = APIRouter(prefix="/api", tags=["access"])


@router.get("/me", response_model=MeResponse)
async def me(user: dict = Depends(get_current_user)):
    return {
        "id": user["id"],
        "email": user.get("email"),
        "role": user["role"],
        "plan": user["plan"],
        "home_route": home_route(user["role"]),
        "limits": limits_for(user["plan"]),
        "is_pro": is_pro(user["plan"]),
        "is_team": is_team(user["plan"]),
        "is_premium": is_premium(user["plan"]),
    }


@router.get("/plans", response_model=Dict[str, PlanLimits])
async def list_plans():
    return PLAN_LIMITS


@router.get("/plans/{plan}", response_model=PlanLimits)
async def get_plan(plan: str):
    limits = PLAN_LIMITS.get(plan.lower())
    if limits is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found")
    return limits
