"""Document repository for database operations."""

from typing import Iterable, List

from ..models import Document
from ..schemas.document import DocumentPayload
from ..exceptions import DocumentNotFoundError
from .base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Ordered lookups and full-replace writes for documents."""

    model_class = Document
    not_found_error = DocumentNotFoundError

    def create(self, data: DocumentPayload) -> Document:
        document = Document(
            directory_id=data.directory_id,
            owner_id=data.owner_id,
            name=data.name,
            content=data.content,
            sort_code=data.sort_code,
        )
        return self.save(document)

    def replace(self, document: Document, data: DocumentPayload) -> Document:
        """Overwrite every mutable field from *data*. A missing owner keeps the stored one."""
        document.directory_id = data.directory_id
        if data.owner_id is not None:
            document.owner_id = data.owner_id
        document.name = data.name
        document.content = data.content
        document.sort_code = data.sort_code
        return self.save(document)

    def find_by_directory(self, directory_id: int) -> List[Document]:
        return (
            self.db.query(Document)
            .filter(Document.directory_id == directory_id)
            .order_by(Document.sort_code.asc(), Document.id.asc())
            .all()
        )

    def find_by_directories(self, directory_ids: Iterable[int]) -> List[Document]:
        """Documents of many directories at once, each group in sort order."""
        ids = list(directory_ids)
        if not ids:
            return []
        return (
            self.db.query(Document)
            .filter(Document.directory_id.in_(ids))
            .order_by(Document.sort_code.asc(), Document.id.asc())
            .all()
        )

    def count_by_directory(self, directory_id: int) -> int:
        return self.db.query(Document).filter(Document.directory_id == directory_id).count()
