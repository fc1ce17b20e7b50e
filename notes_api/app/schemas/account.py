"""
Pydantic models for accounts and sessions.

``Account`` is the stored shape of one entry in the ``@users`` list.
It holds the password verbatim and must never be returned through the
API; use ``AccountRead`` for that.
"""

from pydantic import BaseModel, Field, field_validator


class Account(BaseModel):
    username: str
    password: str


class Credentials(BaseModel):
    """Payload for registration and login."""

    username: str = Field(..., min_length=1, examples=["alice"])
    password: str = Field(..., min_length=1, examples=["secret"])


class SwitchAccount(BaseModel):
    """Payload for switching to another registered account.

    The password of the target account is required and re‑checked
    before the session pointer moves.
    """

    username: str = Field(..., min_length=1)
    password: str

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please enter password")
        return v


class AccountRead(BaseModel):
    """Schema for reading an account from the API."""

    username: str


class SessionRead(BaseModel):
    """The currently active account."""

    username: str
