"""
Search and ordering for a notes listing.

Pure functions over an already loaded collection; nothing here touches
storage.  Filtering is a case‑insensitive substring match on title or
body.  Sorting is stable.  Titles are ordered with a collation key
that ignores accents and case first and puts lowercase before
uppercase only to break ties, which matches how locale‑aware
comparison behaves for ordinary text.
"""

import unicodedata
from typing import List, Sequence, Tuple

from ..schemas.note import Note, SortOrder


def filter_notes(notes: Sequence[Note], query: str) -> Sequence[Note]:
    """Return notes whose title or body contains ``query``.

    A blank query returns ``notes`` itself, not a copy.
    """
    if not query or not query.strip():
        return notes
    needle = query.lower()
    return [note for note in notes if needle in note.title.lower() or needle in note.body.lower()]


def title_collation_key(title: str) -> Tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), title.swapcase()


def sort_notes(notes: Sequence[Note], order: SortOrder) -> List[Note]:
    """Return a new list of ``notes`` in the requested order."""
    order = SortOrder(order)
    if order is SortOrder.UPDATED_DESC:
        return sorted(notes, key=lambda note: note.updated_at, reverse=True)
    if order is SortOrder.UPDATED_ASC:
        return sorted(notes, key=lambda note: note.updated_at)
    if order is SortOrder.TITLE_ASC:
        return sorted(notes, key=lambda note: title_collation_key(note.title))
    return sorted(notes, key=lambda note: title_collation_key(note.title), reverse=True)


def query_notes(notes: Sequence[Note], query: str = "", order: SortOrder = SortOrder.UPDATED_DESC) -> List[Note]:
    """Filter then sort, as shown by the notes listing."""
    return sort_notes(filter_notes(notes, query), order)
