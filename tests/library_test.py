"""Resume library: append-only saves, removal by stable id, tag search."""

from datetime import datetime

import pytest

from src import library as lib
from src.errors import InvalidIndex
from src.fields import DraftFields

NOW = datetime(2026, 10, 18, 15, 4, 5)


def _fields(title: str, tag: str) -> DraftFields:
    return DraftFields(job_title=title, job_type=tag)


def _library_with(*items) -> lib.Library:
    library = lib.Library()
    for title, tag, content, score in items:
        library = lib.save(library, _fields(title, tag), content, score, now=NOW)
    return library


def test_save_builds_entry_from_fields_and_draft():
    library = lib.save(lib.Library(), _fields("Logistics Manager", "Logistics"), "Draft text", 80, now=NOW)
    assert len(library) == 1
    entry = library.entries[0]
    assert entry.title == "Logistics Manager Resume (10/18/2026, 3:04:05 PM)"
    assert entry.tag == "Logistics"
    assert entry.content == "Draft text"
    assert entry.timestamp == "10/18/2026, 3:04:05 PM"
    assert entry.score == 80
    assert entry.id


def test_save_does_not_mutate_previous_library():
    before = lib.Library()
    after = lib.save(before, _fields("A", "Sales"), "x", 0, now=NOW)
    assert len(before) == 0
    assert len(after) == 1


def test_save_never_deduplicates_and_ids_are_unique():
    library = _library_with(("A", "Sales", "same", 20), ("A", "Sales", "same", 20), ("A", "Sales", "same", 20))
    assert len(library) == 3
    assert len({e.id for e in library}) == 3


def test_find_empty_query_returns_all_in_insertion_order():
    library = _library_with(("A", "Sales", "1", 0), ("B", "Logistics", "2", 0), ("C", "Healthcare", "3", 0))
    assert [e.content for e in lib.find(library, "")] == ["1", "2", "3"]
    assert [e.content for e in lib.find(library, None)] == ["1", "2", "3"]


def test_find_is_case_insensitive_substring():
    library = _library_with(("A", "Logistics", "1", 0), ("B", "Sales", "2", 0), ("C", "logistics ops", "3", 0))
    assert [e.content for e in lib.find(library, "logi")] == ["1", "3"]
    assert [e.content for e in lib.find(library, "LOGI")] == ["1", "3"]
    assert lib.find(library, "Marketing") == []


def test_save_then_remove_restores_library():
    library = _library_with(("A", "Sales", "1", 0), ("B", "Logistics", "2", 0))
    saved = lib.save(library, _fields("C", "Healthcare"), "3", 40, now=NOW)
    restored = lib.remove(saved, saved.entries[-1].id)
    assert restored == library


def test_remove_keeps_neighbours():
    library = _library_with(("A", "Sales", "1", 0), ("B", "Logistics", "2", 0), ("C", "Sales", "3", 0))
    middle = library.entries[1]
    remaining = lib.remove(library, middle.id)
    assert [e.content for e in remaining] == ["1", "3"]
    assert remaining.entries[0] == library.entries[0]
    assert remaining.entries[1] == library.entries[2]


def test_remove_from_filtered_view_targets_the_right_entry():
    """Deleting the first visible result of a filter removes that entry, not position 0 of the library."""
    library = _library_with(("A", "Sales", "1", 0), ("B", "Logistics", "2", 0))
    visible = lib.find(library, "logi")
    remaining = lib.remove(library, visible[0].id)
    assert [e.content for e in remaining] == ["1"]


def test_remove_unknown_id_raises_invalid_index():
    library = _library_with(("A", "Sales", "1", 0))
    with pytest.raises(InvalidIndex) as exc_info:
        lib.remove(library, "missing")
    assert exc_info.value.entry_id == "missing"
    assert len(library) == 1


def test_get_and_load_return_saved_content():
    library = _library_with(("A", "Sales", "Saved draft\nline two", 60))
    entry = lib.get(library, library.entries[0].id)
    assert lib.load(entry) == "Saved draft\nline two"
    with pytest.raises(InvalidIndex):
        lib.get(library, "nope")
