"""
Pydantic models for notes.

``Note`` is both the stored record and the API response.  Attributes
are snake_case in Python and camelCase on the wire and in storage
(``imageUri``, ``createdAt``, ``updatedAt``).  Timestamps are integer
milliseconds since the epoch.

``NoteCreate`` and ``NoteUpdate`` carry only the editable fields, so
``id`` and ``createdAt`` can never be set by a caller.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Note(BaseModel):
    id: str
    title: str
    body: str
    image_uri: Optional[str] = Field(None, alias="imageUri")
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")

    model_config = {
        "populate_by_name": True,
        "extra": "allow",
    }

    def to_storage(self) -> dict:
        """Return the JSON‑ready dict written to the store.

        ``imageUri`` is left out entirely when the note has no image.
        Keys this model does not know about are written back unchanged.
        """
        return self.model_dump(by_alias=True, exclude_none=True)


class NoteCreate(BaseModel):
    """Fields supplied when creating a note."""

    title: str = ""
    body: str = ""
    image_uri: Optional[str] = Field(None, alias="imageUri")

    model_config = {
        "populate_by_name": True,
    }


class NoteUpdate(BaseModel):
    """Fields supplied when updating a note.

    All fields are optional; only values that were explicitly set are
    merged into the stored note.  An explicit ``imageUri: null`` removes
    the image.
    """

    title: Optional[str] = None
    body: Optional[str] = None
    image_uri: Optional[str] = Field(None, alias="imageUri")

    model_config = {
        "populate_by_name": True,
    }


class NoteIn(NoteCreate):
    """Request body for creating a note through the API.

    Title and body are trimmed and the title must not be blank.
    """

    title: str

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a title")
        return v

    @field_validator("body")
    @classmethod
    def strip_body(cls, v: str) -> str:
        return v.strip()


class NoteEdit(NoteUpdate):
    """Request body for updating a note through the API."""

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Please enter a title")
        return v

    @field_validator("body")
    @classmethod
    def strip_body(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class SortOrder(str, Enum):
    """Display orders offered by the notes listing."""

    UPDATED_DESC = "updated-desc"
    UPDATED_ASC = "updated-asc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"
