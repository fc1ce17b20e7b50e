"""
Business logic for notes.

Each account's notes are one JSON array stored under
``@notes_<username>``; there is no per‑note key.  Every mutation loads
the whole collection, changes it in memory and writes the whole
collection back.  Mutations for the same username are serialised by
the per‑key lock, so a later write always includes the effects of
earlier ones.

The username is supplied by the caller on every call and is not
checked against the account list.
"""

import json
import logging
import secrets
import string
import time
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..core.errors import NotFound, PersistFailed, StorageError
from ..core.results import ReadResult
from ..core.storage import KeyLocks, KeyValueStore
from ..schemas.note import Note, NoteCreate, NoteUpdate

_notes_adapter = TypeAdapter(List[Note])

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9

logger = logging.getLogger(__name__)


def notes_key(username: str) -> str:
    """Return the storage key holding ``username``'s notes."""
    return f"@notes_{username}"


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_note_id(timestamp: int) -> str:
    """Millisecond timestamp followed by nine random base36 characters."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{timestamp}{suffix}"


class NoteService:
    """CRUD over per‑user note collections."""

    def __init__(self, store: KeyValueStore, locks: Optional[KeyLocks] = None) -> None:
        self.store = store
        self.locks = locks or KeyLocks()

    async def load_notes(self, username: str) -> ReadResult[List[Note]]:
        """Read and parse ``username``'s collection.

        A missing key is ``absent``; a store failure or malformed JSON is
        ``fault``.  Both carry an empty list as their value.
        """
        key = notes_key(username)
        try:
            raw = await self.store.get(key)
        except StorageError as exc:
            return ReadResult.fault([], exc)
        if raw is None:
            return ReadResult.absent([])
        try:
            return ReadResult.ok(_notes_adapter.validate_json(raw))
        except ValidationError as exc:
            return ReadResult.fault([], exc)

    async def list_notes(self, username: str) -> List[Note]:
        """Return every note of ``username`` in storage order.

        Never raises: an unreadable collection is reported as empty.
        """
        result = await self.load_notes(username)
        if result.is_fault:
            logger.warning("Notes of %s unreadable, listing none: %s", username, result.error)
        return result.value

    async def get_note(self, username: str, note_id: str) -> Optional[Note]:
        """Return the note with ``note_id`` or ``None``."""
        for note in await self.list_notes(username):
            if note.id == note_id:
                return note
        return None

    async def create_note(self, username: str, fields: NoteCreate) -> Note:
        """Append a new note and persist the collection.

        Raises ``PersistFailed`` if the collection cannot be read or
        written; in that case nothing was stored.
        """
        async with self.locks.lock(notes_key(username)):
            notes = await self._load_for_write(username)
            timestamp = now_ms()
            note = Note(
                id=generate_note_id(timestamp),
                title=fields.title,
                body=fields.body,
                image_uri=fields.image_uri,
                created_at=timestamp,
                updated_at=timestamp,
            )
            notes.append(note)
            await self._persist(username, notes, "Failed to create note")
        logger.info("Created note %s for %s", note.id, username)
        return note

    async def update_note(self, username: str, note_id: str, updates: NoteUpdate) -> Note:
        """Merge ``updates`` into an existing note and persist.

        Only explicitly supplied fields change.  ``title`` and ``body``
        ignore ``None``; ``image_uri`` set to ``None`` clears the image.
        ``updated_at`` always moves forward, even within the same
        millisecond.
        """
        async with self.locks.lock(notes_key(username)):
            notes = await self._load_for_write(username)
            index = next((i for i, note in enumerate(notes) if note.id == note_id), None)
            if index is None:
                raise NotFound(note_id)
            current = notes[index]
            changes = {
                name: value
                for name, value in updates.model_dump(exclude_unset=True).items()
                if value is not None or name == "image_uri"
            }
            changes["updated_at"] = max(now_ms(), current.updated_at + 1)
            updated = current.model_copy(update=changes)
            notes[index] = updated
            await self._persist(username, notes, "Failed to update note")
        logger.info("Updated note %s for %s", note_id, username)
        return updated

    async def delete_note(self, username: str, note_id: str) -> None:
        """Remove the note with ``note_id``.  Missing ids are ignored."""
        async with self.locks.lock(notes_key(username)):
            notes = await self._load_for_write(username)
            remaining = [note for note in notes if note.id != note_id]
            await self._persist(username, remaining, "Failed to delete note")
        logger.info("Deleted note %s for %s", note_id, username)

    async def _load_for_write(self, username: str) -> List[Note]:
        # A collection we failed to read must not be overwritten.
        result = await self.load_notes(username)
        if result.is_fault:
            logger.error("Cannot read notes of %s: %s", username, result.error)
            raise PersistFailed("Notes could not be read") from result.error
        return result.value

    async def _persist(self, username: str, notes: List[Note], message: str) -> None:
        payload = json.dumps([note.to_storage() for note in notes])
        try:
            await self.store.set(notes_key(username), payload)
        except StorageError as exc:
            logger.error("%s for %s: %s", message, username, exc)
            raise PersistFailed(message) from exc
