from notes_api.app.schemas.note import Note, SortOrder
from notes_api.app.services.query_service import filter_notes, query_notes, sort_notes


def make_note(note_id, title, body="", updated_at=0):
    return Note(id=note_id, title=title, body=body, created_at=0, updated_at=updated_at)


NOTES = [
    make_note("1", "Banana", "yellow fruit", updated_at=20),
    make_note("2", "apple", "Red or green", updated_at=30),
    make_note("3", "Cherry", "small and red", updated_at=10),
]


def titles(notes):
    return [note.title for note in notes]


def test_blank_query_returns_input_unchanged():
    assert filter_notes(NOTES, "") is NOTES
    assert filter_notes(NOTES, "   ") is NOTES


def test_filter_matches_title_or_body_case_insensitively():
    assert titles(filter_notes(NOTES, "RED")) == ["apple", "Cherry"]
    assert titles(filter_notes(NOTES, "ban")) == ["Banana"]


def test_filter_without_matches_is_empty():
    assert list(filter_notes(NOTES, "xyz")) == []


def test_sort_by_title():
    assert titles(sort_notes(NOTES, SortOrder.TITLE_ASC)) == ["apple", "Banana", "Cherry"]
    assert titles(sort_notes(NOTES, SortOrder.TITLE_DESC)) == ["Cherry", "Banana", "apple"]


def test_sort_by_title_ignores_accents():
    notes = [make_note("1", "eclair"), make_note("2", "Éclair"), make_note("3", "dough")]
    assert titles(sort_notes(notes, SortOrder.TITLE_ASC)) == ["dough", "eclair", "Éclair"]


def test_sort_by_updated():
    assert titles(sort_notes(NOTES, SortOrder.UPDATED_DESC)) == ["apple", "Banana", "Cherry"]
    assert titles(sort_notes(NOTES, SortOrder.UPDATED_ASC)) == ["Cherry", "Banana", "apple"]


def test_sort_is_stable():
    notes = [make_note(str(i), "same", updated_at=5) for i in range(4)]
    assert [n.id for n in sort_notes(notes, SortOrder.UPDATED_DESC)] == ["0", "1", "2", "3"]
    assert [n.id for n in sort_notes(notes, SortOrder.TITLE_ASC)] == ["0", "1", "2", "3"]


def test_sort_accepts_string_values():
    assert titles(sort_notes(NOTES, "title-asc")) == ["apple", "Banana", "Cherry"]


def test_sort_does_not_mutate_input():
    before = list(NOTES)
    sort_notes(NOTES, SortOrder.TITLE_DESC)
    assert NOTES == before


def test_query_filters_before_sorting():
    assert titles(query_notes(NOTES, "red", SortOrder.TITLE_DESC)) == ["Cherry", "apple"]
