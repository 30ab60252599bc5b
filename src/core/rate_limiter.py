"""Rate limiting configuration for API endpoints."""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address


def get_rate_limit_key(request: Request) -> str:
    """Get client key from the connection's remote address.

    Forwarded headers are not read here; run uvicorn with --proxy-headers
    and forwarded_allow_ips behind a trusted proxy instead.
    """
    return get_remote_address(request)


limiter = Limiter(key_func=get_rate_limit_key)
