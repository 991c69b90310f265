"""Pydantic schemas for password checks on protected documents and notes."""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class DocumentPasswordCheck(BaseModel):
    """Candidate download password for an important document."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: uuid.UUID = Field(..., alias="documentId")
    password: str = Field(..., min_length=1)


class NotePasswordCheck(BaseModel):
    """Candidate view password for a note."""

    model_config = ConfigDict(populate_by_name=True)

    note_id: uuid.UUID = Field(..., alias="noteId")
    password: str = Field(..., min_length=1)


class PasswordCheckResult(BaseModel):
    """Outcome of a password check."""

    valid: bool
