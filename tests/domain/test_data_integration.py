from __future__ import annotations

import asyncio

import pytest

from indexsync.domain.data_integration import ContentSync, SyncReport
from indexsync.domain.model import FlatRecord
from indexsync.domain.reconciliation import BulkOperationError
from tests.support.entries import make_entry
from tests.support.fakes import FakeEntrySource, FakeSearchIndex


def _sync(
    source: FakeEntrySource,
    index: FakeSearchIndex,
    *,
    locales: tuple[tuple[str, ...], ...] | None = (("en",),),
) -> ContentSync:
    def factory(name: str) -> FakeSearchIndex:
        index.name = name
        return index

    return ContentSync(source=source, index_factory=factory, locales=locales)


def _stored(
    object_id: str, entry_id: str, content_type: str = "page", **fields: object
) -> dict[str, object]:
    return {
        "objectID": object_id,
        "id": entry_id,
        "locale": "en",
        "contentType": content_type,
        **fields,
    }


def _run(sync: ContentSync, *args: object, **kwargs: object) -> SyncReport:
    return asyncio.run(sync.run(*args, **kwargs))  # type: ignore[arg-type]


def test_run_creates_missing_documents() -> None:
    source = FakeEntrySource([make_entry("e1", fields={"title": {"en": "A"}})])
    index = FakeSearchIndex()

    report = _run(_sync(source, index), "page", "content")

    assert report.ok
    assert report.index_name == "content"
    assert report.fetched == 1
    result = report.results["page"]
    assert result.committed
    assert result.records == 1
    assert result.object_ids == ["new-1-0"]
    assert index.added == [[{"title": "A", "contentType": "page", "id": "e1", "locale": "en"}]]
    assert source.calls == [{"entry_id": None, "initial": True}]


def test_run_only_selects_requested_content_types() -> None:
    source = FakeEntrySource(
        [
            make_entry("p1", content_type="page", fields={"title": {"en": "A"}}),
            make_entry("b1", content_type="post", fields={"title": {"en": "B"}}),
        ]
    )
    index = FakeSearchIndex()

    report = _run(_sync(source, index), ["page"], "content")

    assert list(report.results) == ["page"]
    assert [document["id"] for document in index.added[0]] == ["p1"]


def test_run_shares_one_snapshot_across_content_types() -> None:
    source = FakeEntrySource(
        [
            make_entry("p1", content_type="page", fields={"title": {"en": "A"}}),
            make_entry("b1", content_type="post", fields={"title": {"en": "B"}}),
        ]
    )
    index = FakeSearchIndex(
        pages=[
            [
                _stored("o1", "p1", title="old"),
                _stored("o2", "gone", content_type="post"),
            ]
        ]
    )

    report = _run(_sync(source, index), ["page", "post"], "content")

    assert report.ok
    assert index.browse_calls == 1
    assert report.results["page"].batch is not None
    assert [r.object_id for r in report.results["page"].batch.updated] == ["o1"]
    assert report.results["post"].batch is not None
    assert report.results["post"].batch.deleted == ["o2"]
    assert [r.id for r in report.results["post"].batch.created] == ["b1"]


def test_run_hands_records_to_observer_before_indexing() -> None:
    source = FakeEntrySource([make_entry("e1", fields={"title": {"en": "A"}})])
    index = FakeSearchIndex()
    seen: list[list[FlatRecord]] = []

    def observer(content_type: str, records: list[FlatRecord]) -> None:
        assert content_type == "page"
        seen.append(list(records))
        records.clear()

    report = _run(_sync(source, index), "page", "content", observer=observer)

    assert [[record.id for record in records] for records in seen] == [["e1"]]
    assert report.results["page"].batch is not None
    assert report.results["page"].batch.is_empty
    assert index.write_calls == 0


def test_run_isolates_failing_content_type() -> None:
    source = FakeEntrySource(
        [
            make_entry("p1", content_type="page", fields={"title": {"en": "A"}}),
            make_entry("b1", content_type="post", fields={"title": {"en": "B"}}),
        ]
    )
    index = FakeSearchIndex(
        pages=[[_stored("o1", "p1")]],
        fail={"save": RuntimeError("boom")},
    )

    report = _run(_sync(source, index), ["page", "post"], "content")

    assert not report.ok
    assert report.failed == ["page"]
    assert isinstance(report.results["page"].error, BulkOperationError)
    assert not report.results["page"].committed
    assert report.results["post"].committed


def test_run_reports_snapshot_failure_for_every_type() -> None:
    source = FakeEntrySource(
        [
            make_entry("p1", content_type="page", fields={"title": {"en": "A"}}),
            make_entry("b1", content_type="post", fields={"title": {"en": "B"}}),
        ]
    )
    index = FakeSearchIndex(pages=[[]], fail={"browse": RuntimeError("down")})

    report = _run(_sync(source, index), ["page", "post"], "content")

    assert sorted(report.failed) == ["page", "post"]
    assert index.browse_calls == 1
    assert index.write_calls == 0


def test_run_propagates_source_failure() -> None:
    source = FakeEntrySource([], error=RuntimeError("contentful down"))
    index = FakeSearchIndex()

    with pytest.raises(RuntimeError, match="contentful down"):
        _run(_sync(source, index), "page", "content")

    assert index.browse_calls == 0


def test_dry_run_computes_batch_without_writing() -> None:
    source = FakeEntrySource([make_entry("e1", fields={"title": {"en": "A"}})])
    index = FakeSearchIndex(pages=[[_stored("o9", "gone")]])

    report = _run(_sync(source, index), "page", "content", dry_run=True)

    result = report.results["page"]
    assert result.batch is not None
    assert result.batch.summary() == "created=1, updated=0, deleted=1"
    assert not result.committed
    assert index.write_calls == 0


def test_single_entry_run_keeps_other_documents_of_the_type() -> None:
    source = FakeEntrySource(
        [
            make_entry("e1", fields={"title": {"en": "new"}}),
            make_entry("e2", fields={"title": {"en": "B"}}),
        ]
    )
    index = FakeSearchIndex(
        pages=[
            [
                _stored("o1", "e1", title="old"),
                _stored("o3", "e3"),
            ]
        ]
    )

    report = _run(_sync(source, index), "page", "content", entry_id="e1")

    batch = report.results["page"].batch
    assert batch is not None
    assert [record.object_id for record in batch.updated] == ["o1"]
    assert batch.created == []
    assert batch.deleted == []
    assert source.calls == [{"entry_id": "e1", "initial": True}]


def test_run_applies_manipulation_hook() -> None:
    source = FakeEntrySource([make_entry("e1", fields={"title": {"en": "A"}})])
    index = FakeSearchIndex()

    def shout(record: FlatRecord, _siblings: object) -> FlatRecord:
        fields = {**record.fields, "title": str(record.fields["title"]).upper()}
        return FlatRecord(id=record.id, locale=record.locale, fields=fields)

    _run(_sync(source, index), "page", "content", manipulate=shout)

    assert index.added[0][0]["title"] == "A".upper()


def test_failing_delete_does_not_cut_short_slow_creates() -> None:
    source = FakeEntrySource([make_entry("e1", fields={"title": {"en": "A"}})])
    index = FakeSearchIndex(
        pages=[[_stored("o9", "gone")]],
        fail={"delete": RuntimeError("boom")},
        delay={"add": 0.05},
    )

    report = _run(_sync(source, index), "page", "content")

    assert report.failed == ["page"]
    assert [document["id"] for document in index.added[0]] == ["e1"]


def test_observer_failure_only_skips_its_own_type() -> None:
    source = FakeEntrySource(
        [
            make_entry("p1", content_type="page", fields={"title": {"en": "A"}}),
            make_entry("b1", content_type="post", fields={"title": {"en": "B"}}),
        ]
    )
    index = FakeSearchIndex(delay={"add": 0.02})
    error = ValueError("observer")

    def observer(content_type: str, _records: list[FlatRecord]) -> None:
        if content_type == "post":
            raise error

    report = _run(_sync(source, index), ["page", "post"], "content", observer=observer)

    assert report.failed == ["post"]
    assert report.results["post"].error is error
    assert report.results["post"].batch is None
    assert report.results["page"].committed
    assert [document["id"] for batch in index.added for document in batch] == ["p1"]


def test_each_run_takes_a_fresh_snapshot() -> None:
    source = FakeEntrySource([make_entry("e1", fields={"title": {"en": "A"}})])
    index = FakeSearchIndex()
    content_sync = _sync(source, index)

    first = _run(content_sync, "page", "content")
    index.pages = [[_stored("new-1-0", "e1", title="A")]]
    second = _run(content_sync, "page", "content")

    assert first.results["page"].object_ids == ["new-1-0"]
    assert index.browse_calls == 2
    assert second.results["page"].batch is not None
    assert second.results["page"].batch.is_empty
    assert len(index.added) == 1
