"""Document lifecycle: reads, create, full-replace update and delete.

Update and delete snapshot the stored content through HistoryService before
the mutation, inside the same transaction. The order is fixed:

    validate shape -> load -> authorize -> record history -> mutate -> commit
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.validators import id_invalid, is_blank
from ..exceptions import ParamsError
from ..models import Document
from ..repositories import DirectoryRepository, DocumentRepository
from ..schemas.document import DocumentPayload
from .history_service import HistoryService
from .permission_service import authorize, authorize_representative, check_parent_owner

logger = logging.getLogger(__name__)


class DocumentService:
    """Deep module for document operations.

    Callers never coordinate history recording themselves: ``update_document``
    and ``delete_document`` take care of it.
    """

    def __init__(self, db: Session):
        self.db = db
        self.doc_repo = DocumentRepository(db)
        self.dir_repo = DirectoryRepository(db)
        self.history = HistoryService(db)

    def get_document(self, document_id: int, user_id: int) -> Optional[Document]:
        if id_invalid(document_id):
            raise ParamsError("Invalid document id", field="document_id")

        document = self.doc_repo.get_by_id_optional(document_id)
        if document is not None:
            authorize(document.owner_id, user_id, "document")
        return document

    def list_documents(self, directory_id: int, user_id: int) -> List[Document]:
        """Documents of one directory in ``sort_code`` order."""
        if id_invalid(directory_id):
            raise ParamsError("Invalid directory id", field="directory_id")

        documents = self.doc_repo.find_by_directory(directory_id)
        authorize_representative(documents, user_id, "document")
        return documents

    def create_document(self, data: DocumentPayload, user_id: int) -> Document:
        if id_invalid(data.owner_id):
            raise ParamsError("Invalid owner id", field="owner_id")
        self._validate_payload(data)

        authorize(data.owner_id, user_id, "document")
        self._check_directory(data.directory_id, data.owner_id)

        document = self.doc_repo.create(data)
        self.db.commit()
        logger.info(
            "Created document",
            extra={"document_id": document.id, "directory_id": document.directory_id},
        )
        return document

    def update_document(self, data: DocumentPayload, user_id: int) -> Document:
        """Replace every field of a stored document, keeping its previous content in history."""
        if id_invalid(data.id):
            raise ParamsError("Invalid document id", field="id")
        self._validate_payload(data)
        if data.owner_id is not None and id_invalid(data.owner_id):
            raise ParamsError("Invalid owner id", field="owner_id")

        existing = self.doc_repo.get_by_id(data.id)
        authorize(existing.owner_id, user_id, "document")
        if data.owner_id is not None:
            authorize(data.owner_id, user_id, "document")
        self._check_directory(data.directory_id, existing.owner_id)

        snapshot = self.history.record(existing)
        document = self.doc_repo.replace(existing, data)
        self.db.commit()
        logger.info(
            "Updated document",
            extra={"document_id": document.id, "history_id": snapshot.id if snapshot else None},
        )
        return document

    def delete_document(self, document_id: int, user_id: int) -> None:
        if id_invalid(document_id):
            raise ParamsError("Invalid document id", field="document_id")

        existing = self.doc_repo.get_by_id(document_id)
        authorize(existing.owner_id, user_id, "document")

        snapshot = self.history.record(existing)
        self.doc_repo.delete(existing)
        self.db.commit()
        logger.info(
            "Deleted document",
            extra={"document_id": document_id, "history_id": snapshot.id if snapshot else None},
        )

    @staticmethod
    def _validate_payload(data: DocumentPayload) -> None:
        if id_invalid(data.directory_id):
            raise ParamsError("Invalid directory id", field="directory_id")
        if is_blank(data.name):
            raise ParamsError("Document name cannot be blank", field="name")

    def _check_directory(self, directory_id: int, owner_id: int) -> None:
        """The target directory must exist and belong to the document's owner."""
        directory = self.dir_repo.get_by_id_optional(directory_id)
        if directory is None:
            raise ParamsError(f"Directory not found: {directory_id}", field="directory_id")
        check_parent_owner(directory.owner_id, owner_id, "document")
