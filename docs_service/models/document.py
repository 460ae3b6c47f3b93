"""Document model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from ..database import Base


class Document(Base):
    """Leaf content record owned by exactly one directory."""

    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_directory_id", "directory_id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    # No ON DELETE: a directory cannot be deleted while it still holds documents.
    directory_id = Column(Integer, ForeignKey("directories.id"), nullable=False)
    owner_id = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    content = Column(Text, nullable=True)
    sort_code = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
