"""Rate limiting middleware."""

import logging
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from swell_forecast.config import RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS_PER_SECOND
from swell_forecast.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Return HTTP 429 once the global request rate is exceeded."""

    BYPASS_PATHS = {
        "/health",
        "/info",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
    }

    def __init__(
        self,
        app,
        calls: int = RATE_LIMIT_REQUESTS_PER_SECOND,
        enabled: bool = RATE_LIMIT_ENABLED,
        rate_limiter: Optional[RateLimiter] = None
    ):
        """Initialize rate limit middleware.

        Args:
            app: ASGI application
            calls: Maximum requests per second
            enabled: Whether limiting is enforced
            rate_limiter: Optional limiter instance (created lazily otherwise)
        """
        super().__init__(app)
        self.calls = calls
        self.enabled = enabled
        self._rate_limiter = rate_limiter
        logger.info(f"Rate limit enabled: {self.enabled}, limit: {calls} req/sec")

    @property
    def rate_limiter(self) -> RateLimiter:
        if self._rate_limiter is None:
            self._rate_limiter = RateLimiter(max_requests=self.calls)
        return self._rate_limiter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.enabled or request.url.path in self.BYPASS_PATHS:
            return await call_next(request)

        is_allowed, retry_after = await self.rate_limiter.is_allowed()

        if not is_allowed:
            request_host = request.client.host if request.client else "unknown"
            logger.warning(f"Rate limit exceeded for {request_host} accessing {request.method} {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Rate limit exceeded. Please try again later.",
                    "retry_after": retry_after
                },
                headers={"Retry-After": str(retry_after)}
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.rate_limiter.max_requests)
        response.headers["X-RateLimit-Window"] = str(self.rate_limiter.window_size)
        return response
