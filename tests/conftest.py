"""Shared fixtures: an in-memory store, services on top of it and an API client."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from notes_api.app.api.deps import get_store
from notes_api.app.core.storage import KeyLocks, MemoryKeyValueStore
from notes_api.app.main import app
from notes_api.app.services.account_service import AccountService
from notes_api.app.services.note_service import NoteService


@pytest.fixture
def store():
    return MemoryKeyValueStore()


class YieldingStore(MemoryKeyValueStore):
    """Memory store that suspends on every call, like a real async backend."""

    async def get(self, key):
        await asyncio.sleep(0)
        return await super().get(key)

    async def set(self, key, value):
        await asyncio.sleep(0)
        await super().set(key, value)


@pytest.fixture
def yielding_store():
    return YieldingStore()


@pytest.fixture
def locks():
    return KeyLocks()


@pytest.fixture
def accounts(store, locks):
    return AccountService(store, locks)


@pytest.fixture
def notes(store, locks):
    return NoteService(store, locks)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
