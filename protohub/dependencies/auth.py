from typing import Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import httpx
from protohub.access.plans import is_feature_available, limits_for, normalize_plan
from protohub.access.roles import has_role, home_route, normalize_role
from protohub.config import settings
from structlog import get_logger

logger = get_logger()
security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _normalize_user(user_data: dict) -> dict:
    user = dict(user_data)
    user["id"] = str(user.get("id"))
    user["role"] = normalize_role(user.get("role"))
    user["plan"] = normalize_plan(user.get("plan") or user.get("subscription_plan"))
    return user


async def verify_token(token: str) -> dict:
    url = f"{settings.AUTH_SERVICE_URL}/auth/verify"
    async with httpx.AsyncClient(timeout=10.0) as client:
        try:
            logger.info("Verifying token with auth service", url=url)
            response = await client.get(url, headers={"Authorization": f"Bearer {token}"})
            response.raise_for_status()
            user = _normalize_user(response.json())
            logger.info("User verified", user_id=user["id"], role=user["role"])
            return user
        except httpx.HTTPStatusError as e:
            logger.error("Token verification failed", status_code=e.response.status_code, response=e.response.text)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        except httpx.RequestError as e:
            logger.error("Auth service is unavailable", error=str(e))
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Auth service is unavailable")


async def get_current_user(credentials: HTTPAuthorizationCredentials = Security(security)) -> dict:
    return await verify_token(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
) -> Optional[dict]:
    if credentials is None:
        return None
    return await verify_token(credentials.credentials)


def require_role(minimum: str):
    """Dependency factory rejecting users below ``minimum`` in the role hierarchy."""
    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if not has_role(user.get("role"), minimum):
            logger.warning("Insufficient role", user_id=user.get("id"), role=user.get("role"), required=minimum)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "message": "Insufficient role",
                    "required": minimum,
                    "redirect": home_route(user.get("role")),
                },
            )
        return user
    return dependency


def require_feature(feature: str):
    """Dependency factory rejecting users whose plan lacks ``feature``."""
    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if not is_feature_available(limits_for(user.get("plan")), feature):
            logger.info("Feature not in plan", user_id=user.get("id"), plan=user.get("plan"), feature=feature)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "message": "Feature not available on your plan",
                    "feature": feature,
                    "plan": normalize_plan(user.get("plan")),
                    "upgrade_required": True,
                },
            )
        return user
    return dependency
