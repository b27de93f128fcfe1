# filmoteca/core/httpclient.py

from httpx import AsyncClient, Limits, Timeout
from aiolimiter import AsyncLimiter

from filmoteca.core.config import get_settings

# Load settings once into module-level variable for client configuration
settings = get_settings()

# Shared HTTP client for TMDb
# Configured with connection limits and timeouts
tmdb_client = AsyncClient(
    base_url=settings.tmdb_base_url,
    limits=Limits(
        max_connections=20,
        max_keepalive_connections=10
    ),
    timeout=Timeout(settings.tmdb_timeout)
)

# Rate limiter parameterized by settings
tmdb_limiter = AsyncLimiter(
    max_rate=settings.tmdb_rate_limit,
    time_period=10
)
