import pytest

from requestbook.errors import PreconditionError
from requestbook.models import Collection, Header, Request
from requestbook.store import CollectionStore


def test_create_collection_allows_duplicate_names():
    store = CollectionStore()
    store.create_collection("C")
    store.create_collection("C")
    assert [c.name for c in store.collections] == ["C", "C"]


def test_create_collection_requires_name():
    store = CollectionStore()
    with pytest.raises(PreconditionError):
        store.create_collection("  ")
    assert store.collections == []


def test_add_blank_request_targets_first_matching_collection():
    store = CollectionStore([Collection("C"), Collection("C")])
    request = store.add_blank_request("C")
    assert request == Request(name="New Request")
    assert len(store.collections[0].requests) == 1
    assert store.collections[1].requests == []


def test_add_blank_request_missing_collection_is_noop():
    store = CollectionStore([Collection("C")])
    assert store.add_blank_request("missing") is None
    assert store.collections[0].requests == []


def test_load_request_keeps_an_editable_header_row():
    store = CollectionStore()
    slot = store.load_request(Request(name="R", url="http://x"))
    assert slot.loaded
    assert slot.original_name == "R"
    assert slot.request.headers == [Header()]


def test_load_request_copies_fields():
    original = Request(name="R", headers=[Header("A", "1")])
    store = CollectionStore()
    slot = store.load_request(original)
    slot.request.headers[0].value = "2"
    assert original.headers[0].value == "1"


def test_save_without_load_appends_to_first_collection():
    store = CollectionStore([Collection("C1"), Collection("C2")])
    saved = store.save_current_request("Fresh", url="http://x", method="POST", body="{}")
    assert store.collections[0].requests == [saved]
    assert store.collections[1].requests == []
    assert store.editing.original_name == "Fresh"


def test_save_without_collections_fails_without_change():
    store = CollectionStore()
    with pytest.raises(PreconditionError):
        store.save_current_request("Fresh", url="http://x")
    assert store.collections == []
    assert not store.editing.loaded


def test_save_requires_name():
    store = CollectionStore([Collection("C1")])
    with pytest.raises(PreconditionError):
        store.save_current_request("", url="http://x")
    assert store.collections[0].requests == []


def test_save_filters_inactive_headers():
    store = CollectionStore([Collection("C1")])
    saved = store.save_current_request(
        "R",
        headers=[Header("A", "1"), Header("", ""), Header("B", "")],
    )
    assert saved.headers == [Header("A", "1")]
    assert store.collections[0].requests[0].headers == [Header("A", "1")]


def test_duplicate_name_update_rewrites_every_match():
    first = Request(name="Dup", url="http://a")
    second = Request(name="Dup", url="http://b")
    store = CollectionStore([Collection("C1", [first]), Collection("C2", [second])])
    store.load_request(second)
    store.save_current_request("Dup", url="http://new")
    assert store.collections[0].requests[0].url == "http://new"
    assert store.collections[1].requests[0].url == "http://new"


def test_update_matches_original_name_after_rename():
    store = CollectionStore([Collection("C1", [Request(name="Old"), Request(name="Other")])])
    store.load_request(store.collections[0].requests[0])
    store.save_current_request("Renamed", url="http://x")
    assert store.collections[0].request_names() == ["Renamed", "Other"]
    store.save_current_request("Renamed", url="http://y")
    assert store.collections[0].requests[0].url == "http://y"
    assert len(store.collections[0].requests) == 2


def test_second_save_after_new_updates_in_place():
    store = CollectionStore([Collection("C1")])
    store.save_current_request("R", url="http://a")
    store.save_current_request("R", url="http://b")
    assert len(store.collections[0].requests) == 1
    assert store.collections[0].requests[0].url == "http://b"


def test_remove_request_removes_first_match_only():
    store = CollectionStore([Collection("C", [Request(name="Dup", url="a"), Request(name="Dup", url="b")])])
    removed = store.remove_request("C", "Dup")
    assert removed.url == "a"
    assert [r.url for r in store.collections[0].requests] == ["b"]


def test_remove_request_clears_matching_editing_slot():
    request = Request(name="R", url="http://x")
    store = CollectionStore([Collection("C", [request])])
    store.load_request(request)
    store.remove_request("C", "R")
    assert not store.editing.loaded
    assert store.editing.request.url == ""
    assert store.editing.request.headers == [Header()]


def test_remove_other_request_keeps_editing_slot():
    loaded = Request(name="R1")
    store = CollectionStore([Collection("C", [loaded, Request(name="R2")])])
    store.load_request(loaded)
    store.remove_request("C", "R2")
    assert store.editing.original_name == "R1"


def test_import_always_appends_new_collection():
    store = CollectionStore([Collection("api")])
    collection = store.import_collection("### R\nGET http://x\n\nbody", "api")
    assert len(store.collections) == 2
    assert store.collections[1] is collection
    assert store.collections[0].requests == []


def test_import_report_exposes_skipped_lines():
    store = CollectionStore()
    report = store.import_collection_report("### R\nGET http://x\nnot a header\n\nbody", "api")
    assert report.skipped_count == 1
    assert store.collections == [report.collection]


def test_export_by_object_or_name():
    store = CollectionStore([Collection("C", [Request(name="R", url="http://x", body="b")])])
    expected = "### R\nGET http://x\n\nb\n\n"
    assert store.export_collection("C") == expected
    assert store.export_collection(store.collections[0]) == expected
    with pytest.raises(PreconditionError):
        store.export_collection("missing")


def test_remove_collection():
    store = CollectionStore([Collection("A"), Collection("B")])
    assert store.remove_collection("A").name == "A"
    assert store.remove_collection("A") is None
    assert [c.name for c in store.collections] == ["B"]


def test_save_strips_request_name():
    store = CollectionStore([Collection("C1")])
    saved = store.save_current_request("  Padded  ", url="http://x")
    assert saved.name == "Padded"
    assert store.collections[0].request_names() == ["Padded"]
    assert store.editing.original_name == "Padded"
