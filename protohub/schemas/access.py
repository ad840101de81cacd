from typing import Optional

from pydantic import BaseModel

from protohub.access.plans import PlanLimits


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: str
    plan: str
    home_route: str
    limits: PlanLimits
    is_pro: bool
    is_team: bool
    is_premium: bool
