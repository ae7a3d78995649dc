from slowapi import Limiter
from slowapi.util import get_remote_address

from jobboard.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.ENABLE_RATE_LIMITING)


def maybe_limit(rule: str):
    """
    Apply a slowapi rule only when rate limiting is enabled. The decorated route
    must accept ``request: Request``.
    """
    if not settings.ENABLE_RATE_LIMITING:
        def passthrough(fn):
            return fn
        return passthrough
    return limiter.limit(rule)
