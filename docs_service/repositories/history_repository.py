"""Document history repository. Append and read only."""

from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from ..models import DocumentHistory


class DocumentHistoryRepository:
    """Data access for the append-only history log."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, owner_id: int, document_id: int, content: str) -> DocumentHistory:
        entry = DocumentHistory(
            owner_id=owner_id,
            document_id=document_id,
            content=content,
            saved_time=datetime.now(timezone.utc),
        )
        self.db.add(entry)
        self.db.flush()
        self.db.refresh(entry)
        return entry

    def find_by_document(self, document_id: int, skip: int = 0, limit: int = 50) -> List[DocumentHistory]:
        """Newest snapshot first."""
        return (
            self.db.query(DocumentHistory)
            .filter(DocumentHistory.document_id == document_id)
            .order_by(DocumentHistory.saved_time.desc(), DocumentHistory.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
