"""Locale fallback configuration.

A fallback configuration is written as groups separated by ``;`` with the
codes of a group separated by ``,``: ``de-CH,de-DE;en-US`` yields two
records per entry, ``de-CH`` (falling back to ``de-DE``) and ``en-US``.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError

if TYPE_CHECKING:
    from indexsync.domain.model import LocaleFallbacks

LOCALES_ENV_VAR = "INDEXSYNC_LOCALES"


def parse_locale_fallbacks(value: str) -> LocaleFallbacks:
    groups: list[tuple[str, ...]] = []
    for raw_group in value.split(";"):
        if not raw_group.strip():
            continue
        codes = tuple(code.strip() for code in raw_group.split(","))
        if not all(codes):
            raise ConfigurationError(f"Empty locale code in group {raw_group!r}")
        if len(set(codes)) != len(codes):
            raise ConfigurationError(f"Duplicate locale code in group {raw_group!r}")
        groups.append(codes)

    primaries = [group[0] for group in groups]
    if len(set(primaries)) != len(primaries):
        raise ConfigurationError(f"Locale groups must start with distinct codes: {value!r}")
    return tuple(groups)


def get_locale_fallbacks() -> LocaleFallbacks | None:
    """Fallback groups from the environment, ``None`` when not configured."""

    value = os.getenv(LOCALES_ENV_VAR)
    if value is None or not value.strip():
        return None
    return parse_locale_fallbacks(value)
