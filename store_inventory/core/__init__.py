from .config import Settings, settings
from .rate_limit import RateLimitMiddleware, build_limiter

__all__ = ["Settings", "settings", "build_limiter", "RateLimitMiddleware"]
