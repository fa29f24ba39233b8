"""Contentful delivery API configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_flag, optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig

CONTENTFUL_DEFAULT_HOST = "cdn.contentful.com"
CONTENTFUL_DEFAULT_ENVIRONMENT = "master"
CONTENTFUL_TIMEOUT_SECONDS = 30.0


def contentful_resilience(
    host: str = CONTENTFUL_DEFAULT_HOST,
    *,
    cache: CacheConfig | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="contentful",
        base_url=f"https://{host}",
        timeout_seconds=CONTENTFUL_TIMEOUT_SECONDS,
        # delivery API allows 55 requests per second
        ratelimit=RateLimit(max_calls=50, per_seconds=1.0),
        cache=cache,
    )


@dataclass(frozen=True)
class ContentfulConfig:
    """Holds Contentful space credentials and client settings."""

    space_id: str
    access_token: str
    host: str = CONTENTFUL_DEFAULT_HOST
    environment: str = CONTENTFUL_DEFAULT_ENVIRONMENT
    resolve_links: bool = False
    resilience: ResilienceConfig = field(default_factory=contentful_resilience)


def _cache_from_env() -> CacheConfig | None:
    backend = optional_env_var("CONTENTFUL_HTTP_CACHE", "off").lower()
    if backend == "off":
        return None
    if backend == "memory":
        return CacheConfig(backend="memory")
    if backend == "sqlite":
        return CacheConfig(backend="sqlite")
    raise ConfigurationError(f"Unsupported CONTENTFUL_HTTP_CACHE value: {backend!r}")


def get_contentful_config(*, resilience: ResilienceConfig | None = None) -> ContentfulConfig:
    values = require_env_vars(("CONTENTFUL_SPACE_ID", "CONTENTFUL_ACCESS_TOKEN"))
    host = optional_env_var("CONTENTFUL_HOST", CONTENTFUL_DEFAULT_HOST)
    return ContentfulConfig(
        space_id=values["CONTENTFUL_SPACE_ID"],
        access_token=values["CONTENTFUL_ACCESS_TOKEN"],
        host=host,
        environment=optional_env_var("CONTENTFUL_ENVIRONMENT", CONTENTFUL_DEFAULT_ENVIRONMENT),
        resolve_links=env_flag("CONTENTFUL_RESOLVE_LINKS"),
        resilience=resilience or contentful_resilience(host, cache=_cache_from_env()),
    )
