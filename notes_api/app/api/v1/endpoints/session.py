"""
Session endpoints for API v1.

Login, logout, reading the active account and switching to another
account.  Switching re‑checks the target account's password first and
only then moves the session pointer, so a failed attempt leaves the
current session untouched.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from notes_api.app.api.deps import get_account_service, get_current_username
from notes_api.app.core.errors import InvalidCredentials, StorageUnavailable
from notes_api.app.schemas.account import Credentials, SessionRead, SwitchAccount
from notes_api.app.services.account_service import AccountService

router = APIRouter()


@router.post("/login", response_model=SessionRead)
async def login(
    payload: Credentials,
    accounts: AccountService = Depends(get_account_service),
) -> SessionRead:
    try:
        await accounts.authenticate(payload.username, payload.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except StorageUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return SessionRead(username=payload.username)


@router.get("/", response_model=SessionRead)
async def current_session(
    accounts: AccountService = Depends(get_account_service),
) -> SessionRead:
    """Return the active account; 404 when logged out."""
    username = await accounts.get_current_session()
    if not username:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not logged in")
    return SessionRead(username=username)


@router.post("/switch", response_model=SessionRead)
async def switch_account(
    payload: SwitchAccount,
    current_username: str = Depends(get_current_username),
    accounts: AccountService = Depends(get_account_service),
) -> SessionRead:
    """Switch the active session to another registered account."""
    if payload.username == current_username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You are already logged in as this user",
        )
    if not await accounts.verify_credentials(payload.username, payload.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")
    try:
        await accounts.switch_session(payload.username)
    except StorageUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return SessionRead(username=payload.username)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    accounts: AccountService = Depends(get_account_service),
) -> None:
    """Log out.  Always succeeds."""
    await accounts.end_session()
    return None
