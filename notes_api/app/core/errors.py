"""
Exception taxonomy for the persistence layer.

Services raise these typed failures; the HTTP layer translates them
into status codes.  ``StorageError`` is raised by key‑value store
implementations and never leaves the service layer unwrapped.
"""


class NotesError(Exception):
    """Base class for all failures raised by the services."""


class StorageError(NotesError):
    """The underlying key‑value store failed a read, write or remove."""


class DuplicateUsername(NotesError):
    """An account with exactly this username is already registered."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} already exists")
        self.username = username


class InvalidCredentials(NotesError):
    """No account matches the supplied username and password.

    Raised both for unknown usernames and for wrong passwords so callers
    cannot tell which one happened.
    """

    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class NotFound(NotesError):
    """A note with the requested id does not exist in the collection."""

    def __init__(self, note_id: str) -> None:
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id


class PersistFailed(NotesError):
    """Writing a note collection back to the store failed."""


class StorageUnavailable(NotesError):
    """The store failed during an account or session operation."""
