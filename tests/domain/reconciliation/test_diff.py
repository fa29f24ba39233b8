from __future__ import annotations

from indexsync.domain.flatten import flatten_entry
from indexsync.domain.model import FlatRecord, IndexHit
from indexsync.domain.reconciliation import diff_records
from tests.support.entries import make_entry


def _hit(**document: object) -> IndexHit:
    return IndexHit.from_document(document)


def test_new_entry_is_created() -> None:
    entry = make_entry("e1", content_type="page", fields={"title": {"en": "A"}})
    records = flatten_entry(entry, (("en",),))

    batch = diff_records(records, [], "page")

    assert len(batch.created) == 1
    created = batch.created[0]
    assert (created.id, created.locale) == ("e1", "en")
    assert created.fields == {"title": "A", "contentType": "page"}
    assert batch.updated == []
    assert batch.deleted == []


def test_matching_unchanged_record_is_left_alone() -> None:
    entry = make_entry("e1", content_type="page", fields={"title": {"en": "A"}})
    records = flatten_entry(entry, (("en",),))
    snapshot = [_hit(id="e1", locale="en", title="A", objectID="obj1", contentType="page")]

    batch = diff_records(records, snapshot, "page")

    assert batch.is_empty


def test_changed_record_is_updated_with_object_id(page_record: FlatRecord) -> None:
    snapshot = [_hit(id="e1", locale="en", title="B", objectID="obj1", contentType="page")]

    batch = diff_records([page_record], snapshot, "page")

    assert batch.created == []
    assert batch.deleted == []
    assert [record.object_id for record in batch.updated] == ["obj1"]
    assert batch.updated[0].to_document()["title"] == "A"
    assert page_record.object_id is None


def test_absent_field_against_stored_value_is_an_update(page_record: FlatRecord) -> None:
    snapshot = [
        _hit(id="e1", locale="en", title="A", body="old", objectID="obj1", contentType="page")
    ]

    batch = diff_records([page_record], snapshot, "page")

    assert [record.object_id for record in batch.updated] == ["obj1"]


def test_unmatched_hit_is_deleted_only_with_filter(page_record: FlatRecord) -> None:
    snapshot = [_hit(id="gone", locale="en", objectID="obj9", contentType="page")]

    filtered = diff_records([page_record], snapshot, "page")
    unfiltered = diff_records([page_record], snapshot)

    assert filtered.deleted == ["obj9"]
    assert unfiltered.deleted == []
    assert len(filtered.created) == len(unfiltered.created) == 1


def test_filter_ignores_hits_of_other_types(page_record: FlatRecord) -> None:
    snapshot = [
        _hit(id="e1", locale="en", title="A", objectID="obj1", contentType="post"),
        _hit(id="p2", locale="en", objectID="obj2", contentType="post"),
    ]

    batch = diff_records([page_record], snapshot, "page")

    assert batch.deleted == []
    assert [record.id for record in batch.created] == ["e1"]


def test_unfiltered_diff_matches_across_types(page_record: FlatRecord) -> None:
    snapshot = [_hit(id="e1", locale="en", title="A", objectID="obj1", contentType="page")]

    batch = diff_records([page_record], snapshot)

    assert batch.is_empty


def test_locale_variants_are_matched_separately() -> None:
    entry = make_entry("e1", fields={"title": {"en": "A", "de": "B"}})
    records = flatten_entry(entry, (("en",), ("de",)))
    snapshot = [
        _hit(id="e1", locale="en", title="A", objectID="obj-en", contentType="page"),
        _hit(id="e1", locale="fr", title="C", objectID="obj-fr", contentType="page"),
    ]

    batch = diff_records(records, snapshot, "page")

    assert [(record.locale, record.object_id) for record in batch.created] == [("de", None)]
    assert batch.updated == []
    assert batch.deleted == ["obj-fr"]


def test_duplicate_hits_keep_first_and_delete_rest(page_record: FlatRecord) -> None:
    snapshot = [
        _hit(id="e1", locale="en", title="A", objectID="obj1", contentType="page"),
        _hit(id="e1", locale="en", title="A", objectID="obj2", contentType="page"),
    ]

    batch = diff_records([page_record], snapshot, "page")

    assert batch.updated == []
    assert batch.created == []
    assert batch.deleted == ["obj2"]


def test_hits_without_identity_are_deleted_under_filter(page_record: FlatRecord) -> None:
    snapshot = [_hit(objectID="stray", contentType="page")]

    batch = diff_records([page_record], snapshot, "page")

    assert batch.deleted == ["stray"]


def test_record_with_preset_object_id_is_not_created() -> None:
    record = FlatRecord(
        id="e1", locale="en", fields={"contentType": "page"}, object_id="external"
    )

    batch = diff_records([record], [], "page")

    assert batch.is_empty


def test_duplicate_incoming_records_last_wins() -> None:
    first = FlatRecord(id="e1", locale="en", fields={"title": "old", "contentType": "page"})
    last = FlatRecord(id="e1", locale="en", fields={"title": "new", "contentType": "page"})

    batch = diff_records([first, last], [], "page")

    assert batch.created == [last]
