from __future__ import annotations

import pytest

from indexsync.domain.model import FlatRecord


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CONTENTFUL_SPACE_ID",
        "CONTENTFUL_ACCESS_TOKEN",
        "CONTENTFUL_HOST",
        "CONTENTFUL_ENVIRONMENT",
        "CONTENTFUL_RESOLVE_LINKS",
        "CONTENTFUL_HTTP_CACHE",
        "ALGOLIA_APPLICATION_ID",
        "ALGOLIA_API_KEY",
        "ALGOLIA_INDEX_PREFIX",
        "INDEXSYNC_LOCALES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def page_record() -> FlatRecord:
    return FlatRecord(
        id="e1",
        locale="en",
        fields={"title": "A", "contentType": "page"},
    )
