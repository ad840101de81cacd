from fastapi import Depends, Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter


def rate_limit(times: int, seconds: int):
    """
    Per-route rate limit backed by fastapi-limiter.

    The limiter is only initialised when RATE_LIMIT_ENABLED is set; without an
    initialised limiter the route is left unthrottled.
    """
    limiter = RateLimiter(times=times, seconds=seconds)

    async def dependency(request: Request, response: Response):
        if FastAPILimiter.redis is None:
            return
        await limiter(request, response)

    return Depends(dependency)
