"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import accounts, notes, session

router = APIRouter()

router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(session.router, prefix="/session", tags=["session"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
