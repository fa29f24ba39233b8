"""Algolia search index configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig

ALGOLIA_TIMEOUT_SECONDS = 30.0
ALGOLIA_BATCH_SIZE = 1000


def algolia_resilience(application_id: str) -> ResilienceConfig:
    return ResilienceConfig(
        name="algolia",
        base_url=f"https://{application_id}.algolia.net",
        timeout_seconds=ALGOLIA_TIMEOUT_SECONDS,
    )


@dataclass(frozen=True)
class AlgoliaConfig:
    """Holds Algolia application credentials and index naming."""

    application_id: str
    api_key: str
    index_prefix: str = ""
    batch_size: int = ALGOLIA_BATCH_SIZE
    resilience: ResilienceConfig | None = field(default=None)

    def index_name(self, name: str) -> str:
        return f"{self.index_prefix}{name}"

    def resilience_config(self) -> ResilienceConfig:
        return self.resilience or algolia_resilience(self.application_id)


def get_algolia_config(*, resilience: ResilienceConfig | None = None) -> AlgoliaConfig:
    values = require_env_vars(("ALGOLIA_APPLICATION_ID", "ALGOLIA_API_KEY"))
    return AlgoliaConfig(
        application_id=values["ALGOLIA_APPLICATION_ID"],
        api_key=values["ALGOLIA_API_KEY"],
        index_prefix=optional_env_var("ALGOLIA_INDEX_PREFIX", ""),
        resilience=resilience,
    )
