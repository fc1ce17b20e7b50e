"""
FastAPI dependencies wiring the services to the configured store.

The store is created lazily on first use from ``settings.storage_url``.
Tests replace it through ``app.dependency_overrides[get_store]``.
A single ``KeyLocks`` registry is shared by every request so that
concurrent requests for the same user are serialised.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status

from ..core.storage import KeyLocks, KeyValueStore, SQLiteKeyValueStore, get_database_path
from ..services.account_service import AccountService
from ..services.note_service import NoteService

_store: Optional[KeyValueStore] = None
_locks = KeyLocks()


def get_store() -> KeyValueStore:
    """Return the process‑wide key‑value store."""
    global _store
    if _store is None:
        _store = SQLiteKeyValueStore(get_database_path())
    return _store


def init_storage() -> None:
    """Create the backing SQLite file and table at startup."""
    store = get_store()
    if isinstance(store, SQLiteKeyValueStore):
        store.initialise()


def get_account_service(store: KeyValueStore = Depends(get_store)) -> AccountService:
    return AccountService(store, _locks)


def get_note_service(store: KeyValueStore = Depends(get_store)) -> NoteService:
    return NoteService(store, _locks)


async def get_current_username(
    accounts: AccountService = Depends(get_account_service),
) -> str:
    """Dependency resolving the active account.

    Raises HTTP 401 when nobody is logged in.  The returned username is
    passed explicitly to ``NoteService`` by the note endpoints.
    """
    username = await accounts.get_current_session()
    if not username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
        )
    return username
