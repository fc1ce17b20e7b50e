"""
Business logic for accounts and the current session.

Accounts live as one JSON array under ``@users``; the name of the
active account lives as a plain string under ``@current_user``.  Every
change to the account list reads the whole list, changes it in memory
and writes the whole list back while holding the lock for
``@users``.

Passwords are stored and compared in plaintext (see
``core.security``).
"""

import json
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from ..core.errors import DuplicateUsername, InvalidCredentials, StorageError, StorageUnavailable
from ..core.results import ReadResult
from ..core.security import passwords_match
from ..core.storage import KeyLocks, KeyValueStore
from ..schemas.account import Account

USERS_KEY = "@users"
CURRENT_USER_KEY = "@current_user"

_accounts_adapter = TypeAdapter(List[Account])

logger = logging.getLogger(__name__)


class AccountService:
    """Registration, credential checks and the session pointer."""

    def __init__(self, store: KeyValueStore, locks: Optional[KeyLocks] = None) -> None:
        self.store = store
        self.locks = locks or KeyLocks()

    async def load_accounts(self) -> ReadResult[List[Account]]:
        """Read and parse the account list.

        A missing key is reported as ``absent``; a store failure or a
        value that is not a list of accounts is reported as ``fault``.
        """
        try:
            raw = await self.store.get(USERS_KEY)
        except StorageError as exc:
            return ReadResult.fault([], exc)
        if raw is None:
            return ReadResult.absent([])
        try:
            return ReadResult.ok(_accounts_adapter.validate_json(raw))
        except ValidationError as exc:
            return ReadResult.fault([], exc)

    async def read_session(self) -> ReadResult[Optional[str]]:
        """Read the session pointer without degrading failures."""
        try:
            username = await self.store.get(CURRENT_USER_KEY)
        except StorageError as exc:
            return ReadResult.fault(None, exc)
        if username is None:
            return ReadResult.absent(None)
        return ReadResult.ok(username)

    async def register(self, username: str, password: str) -> None:
        """Add a new account.

        Raises ``DuplicateUsername`` if the exact username is already
        registered.  Does not log the new account in.
        """
        async with self.locks.lock(USERS_KEY):
            result = await self.load_accounts()
            if result.is_fault:
                logger.error("Cannot read account list: %s", result.error)
                raise StorageUnavailable("Failed to sign up") from result.error
            accounts = result.value
            if any(account.username == username for account in accounts):
                raise DuplicateUsername(username)
            accounts.append(Account(username=username, password=password))
            await self._write_accounts(accounts)
        logger.info("Registered account %s", username)

    async def authenticate(self, username: str, password: str) -> None:
        """Log in with a username and password.

        On success the session pointer is set to ``username``.  Unknown
        usernames and wrong passwords both raise ``InvalidCredentials``.
        """
        result = await self.load_accounts()
        if result.is_fault:
            logger.error("Cannot read account list: %s", result.error)
            raise StorageUnavailable("Failed to login") from result.error
        if not self._find(result.value, username, password):
            logger.info("Rejected login for %s", username)
            raise InvalidCredentials()
        await self._write_session(username, "Failed to login")
        logger.info("Logged in as %s", username)

    async def sign_up(self, username: str, password: str) -> None:
        """Register a new account and log straight into it."""
        await self.register(username, password)
        await self.authenticate(username, password)

    async def verify_credentials(self, username: str, password: str) -> bool:
        """Return whether the credentials match, leaving the session alone."""
        result = await self.load_accounts()
        if result.is_fault:
            logger.warning("Credential check degraded to False: %s", result.error)
            return False
        return self._find(result.value, username, password)

    async def switch_session(self, username: str) -> None:
        """Point the session at ``username`` without checking it exists."""
        await self._write_session(username, "Failed to switch user")
        logger.info("Switched session to %s", username)

    async def get_current_session(self) -> Optional[str]:
        """Return the active username, or ``None`` when logged out."""
        result = await self.read_session()
        if result.is_fault:
            logger.warning("Session read degraded to logged out: %s", result.error)
        return result.value

    async def list_usernames(self) -> List[str]:
        """Return all registered usernames in registration order."""
        result = await self.load_accounts()
        if result.is_fault:
            logger.warning("Account list read degraded to empty: %s", result.error)
        return [account.username for account in result.value]

    async def end_session(self) -> None:
        """Clear the session pointer.  Failures are logged and ignored."""
        try:
            await self.store.remove(CURRENT_USER_KEY)
        except StorageError as exc:
            logger.warning("Logout could not clear session: %s", exc)
            return
        logger.info("Session ended")

    @staticmethod
    def _find(accounts: List[Account], username: str, password: str) -> bool:
        return any(
            account.username == username and passwords_match(account.password, password)
            for account in accounts
        )

    async def _write_accounts(self, accounts: List[Account]) -> None:
        payload = json.dumps([account.model_dump() for account in accounts])
        try:
            await self.store.set(USERS_KEY, payload)
        except StorageError as exc:
            logger.error("Cannot write account list: %s", exc)
            raise StorageUnavailable("Failed to sign up") from exc

    async def _write_session(self, username: str, message: str) -> None:
        try:
            await self.store.set(CURRENT_USER_KEY, username)
        except StorageError as exc:
            logger.error("Cannot write session pointer: %s", exc)
            raise StorageUnavailable(message) from exc
