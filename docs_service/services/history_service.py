"""History recorder: snapshots document content before it changes."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.validators import id_invalid, is_blank
from ..exceptions import ParamsError
from ..models import Document, DocumentHistory
from ..repositories import DocumentHistoryRepository
from .permission_service import authorize_representative

logger = logging.getLogger(__name__)


class HistoryService:

    def __init__(self, db: Session):
        self.db = db
        self.repo = DocumentHistoryRepository(db)

    def record(self, document: Document) -> Optional[DocumentHistory]:
        """Append a snapshot of *document*'s current content.

        Blank content is not recorded. The row is flushed, not committed: the
        caller commits it together with the update or delete it precedes.
        """
        if is_blank(document.content):
            return None

        entry = self.repo.append(document.owner_id, document.id, document.content)
        logger.debug("Recorded history", extra={"document_id": document.id, "history_id": entry.id})
        return entry

    def list_history(self, document_id: int, user_id: int, skip: int = 0, limit: int = 50) -> List[DocumentHistory]:
        """Snapshots of one document, newest first."""
        if id_invalid(document_id):
            raise ParamsError("Invalid document id", field="document_id")

        entries = self.repo.find_by_document(document_id, skip, limit)
        authorize_representative(entries, user_id, "document")
        return entries
