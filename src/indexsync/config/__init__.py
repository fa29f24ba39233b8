"""Application configuration helpers."""

from __future__ import annotations

from .algolia import AlgoliaConfig, get_algolia_config
from .contentful import ContentfulConfig, get_contentful_config
from .env import env_flag, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .locales import get_locale_fallbacks, parse_locale_fallbacks

__all__ = [
    "AlgoliaConfig",
    "CacheConfig",
    "ConfigurationError",
    "ContentfulConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "env_flag",
    "get_algolia_config",
    "get_contentful_config",
    "get_locale_fallbacks",
    "optional_env_var",
    "parse_locale_fallbacks",
    "require_env_var",
    "require_env_vars",
]
