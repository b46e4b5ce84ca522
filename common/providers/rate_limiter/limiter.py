"""Global rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from common.core.config import settings

# - 10/second: absorbs bursts from a page loading several widgets at once
# - 300/minute: sustained rate limit (5 req/sec average)
# storage_uri may point at a shared backend when running several API pods
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["10/second", "300/minute"],
    storage_uri=settings.rate_limit_storage_uri,
)
