"""Document history model."""

from sqlalchemy import Column, Index, Integer, Text, DateTime
from ..database import Base


class DocumentHistory(Base):
    """Append-only snapshot of a document's content before an update or delete.

    ``document_id`` has no foreign key: history outlives the
    document it was taken from.
    """

    __tablename__ = "document_histories"
    __table_args__ = (
        Index("ix_document_histories_document_id", "document_id"),
        Index("ix_document_histories_saved_time", "saved_time"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, nullable=False)
    document_id = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    saved_time = Column(DateTime(timezone=True), nullable=False)
