"""
Account endpoints for API v1.

Registration, sign‑up (registration followed by login) and the list of
usernames shown by the account switcher.  Passwords are never returned.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from notes_api.app.api.deps import get_account_service
from notes_api.app.core.errors import DuplicateUsername, StorageUnavailable
from notes_api.app.schemas.account import AccountRead, Credentials, SessionRead
from notes_api.app.services.account_service import AccountService

router = APIRouter()


@router.post("/", response_model=AccountRead, status_code=status.HTTP_201_CREATED)
async def register_account(
    payload: Credentials,
    accounts: AccountService = Depends(get_account_service),
) -> AccountRead:
    """Register a new account without logging in."""
    try:
        await accounts.register(payload.username, payload.password)
    except DuplicateUsername as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return AccountRead(username=payload.username)


@router.post("/signup", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: Credentials,
    accounts: AccountService = Depends(get_account_service),
) -> SessionRead:
    """Register a new account and make it the active session."""
    try:
        await accounts.sign_up(payload.username, payload.password)
    except DuplicateUsername as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return SessionRead(username=payload.username)


@router.get("/", response_model=List[AccountRead])
async def list_accounts(
    accounts: AccountService = Depends(get_account_service),
) -> List[AccountRead]:
    """List registered usernames in registration order."""
    return [AccountRead(username=name) for name in await accounts.list_usernames()]
