"""
Note endpoints for API v1.

Every route operates on the notes of the active session.  The session
username is resolved once per request by ``get_current_username`` and
handed to ``NoteService`` explicitly.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from notes_api.app.api.deps import get_current_username, get_note_service
from notes_api.app.core.errors import NotFound, PersistFailed
from notes_api.app.schemas.note import Note, NoteEdit, NoteIn, SortOrder
from notes_api.app.services.note_service import NoteService
from notes_api.app.services.query_service import query_notes

router = APIRouter()


@router.get("/", response_model=List[Note], response_model_exclude_none=True)
async def list_notes(
    q: str = Query("", description="Case-insensitive text searched in title and body"),
    sort: SortOrder = Query(SortOrder.UPDATED_DESC),
    username: str = Depends(get_current_username),
    notes: NoteService = Depends(get_note_service),
) -> List[Note]:
    """Return the filtered and sorted notes of the active account."""
    return query_notes(await notes.list_notes(username), q, sort)


@router.post("/", response_model=Note, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteIn,
    username: str = Depends(get_current_username),
    notes: NoteService = Depends(get_note_service),
) -> Note:
    try:
        return await notes.create_note(username, payload)
    except PersistFailed as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/{note_id}", response_model=Note, response_model_exclude_none=True)
async def get_note(
    note_id: str,
    username: str = Depends(get_current_username),
    notes: NoteService = Depends(get_note_service),
) -> Note:
    note = await notes.get_note(username, note_id)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return note


@router.put("/{note_id}", response_model=Note, response_model_exclude_none=True)
async def update_note(
    note_id: str,
    payload: NoteEdit,
    username: str = Depends(get_current_username),
    notes: NoteService = Depends(get_note_service),
) -> Note:
    """Update the supplied fields of a note.

    Send ``"imageUri": null`` to remove the note's image.
    """
    try:
        return await notes.update_note(username, note_id, payload)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistFailed as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    username: str = Depends(get_current_username),
    notes: NoteService = Depends(get_note_service),
) -> None:
    try:
        await notes.delete_note(username, note_id)
    except PersistFailed as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return None
