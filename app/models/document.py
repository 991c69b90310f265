"""Password-protectable user content: important documents and notes."""

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class ImportantDocument(BaseModel):
    """A stored document; downloads may be gated by a password."""

    __tablename__ = "tools_id_documents"
    __table_args__ = (
        Index("idx_tools_id_documents_user", "user_id"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    tool_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("tools.id", ondelete="SET NULL"),
        nullable=True,
    )
    document_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    requires_password_for_download: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    download_password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    @property
    def requires_password(self) -> bool:
        return bool(self.requires_password_for_download)

    @property
    def password_hash(self) -> str | None:
        return self.download_password_hash


class Note(BaseModel):
    """A free-text note; viewing may be gated by a password."""

    __tablename__ = "tools_note_notes"
    __table_args__ = (
        Index("idx_tools_note_notes_user", "user_id"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    requires_password_for_view: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    view_password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    @property
    def requires_password(self) -> bool:
        return bool(self.requires_password_for_view)

    @property
    def password_hash(self) -> str | None:
        return self.view_password_hash
