from slowapi import Limiter
from slowapi.middleware import sync_check_limits
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .config import Settings


def client_address(request: Request) -> str:
    """Key requests by the first forwarded address, falling back to the peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return get_remote_address(request) or "unknown"


def build_limiter(settings: Settings) -> Limiter:
    # Application limits share one fixed window per client across every route
    return Limiter(
        key_func=client_address,
        application_limits=[settings.rate_limit],
        strategy="fixed-window",
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        headers_enabled=True,
        enabled=settings.RATE_LIMIT_ENABLED,
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Counts every request against the application limits of ``app.state.limiter``.

    Unlike ``SlowAPIMiddleware`` this does not look the endpoint up in
    ``app.routes``: routes pulled in with ``include_router`` are limited
    the same as routes declared on the app.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled:
            return await call_next(request)

        error_response, inject_headers = sync_check_limits(limiter, request, None, request.app)
        if error_response is not None:
            return error_response

        response = await call_next(request)
        if inject_headers:
            response = limiter._inject_headers(response, request.state.view_rate_limit)
        return response
