"""Document API: CRUD, per-directory listing and edit history.

Update and delete record the previous content through DocumentService; the
endpoints here only translate HTTP into service calls.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..exceptions import ParamsError
from ..schemas.document import DocumentPayload, DocumentResponse
from ..schemas.history import DocumentHistoryResponse
from ..schemas.result import Result
from ..services import DocumentService, HistoryService

router = APIRouter(prefix="/api/documents", tags=["documents"])


# --- Fixed-prefix endpoints (before /{document_id}) ---


@router.get("/directories/{directory_id}", response_model=Result[List[DocumentResponse]])
def list_directory_documents(
    directory_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = DocumentService(db)
    documents = service.list_documents(directory_id, auth.user_id)
    return Result.ok([DocumentResponse.model_validate(d) for d in documents])


# --- Parameterized endpoints ---


@router.get("/{document_id}", response_model=Result[Optional[DocumentResponse]])
def get_document(
    document_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """A missing document is a successful, empty result."""
    service = DocumentService(db)
    document = service.get_document(document_id, auth.user_id)
    return Result.ok(DocumentResponse.model_validate(document) if document else None)


@router.get("/{document_id}/histories", response_model=Result[List[DocumentHistoryResponse]])
def list_document_history(
    document_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Content snapshots, newest first. Still readable after the document is deleted."""
    service = HistoryService(db)
    entries = service.list_history(document_id, auth.user_id, skip, limit)
    return Result.ok([DocumentHistoryResponse.model_validate(e) for e in entries])


@router.post("", response_model=Result[DocumentResponse], status_code=201)
def create_document(
    data: DocumentPayload,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = DocumentService(db)
    document = service.create_document(data, auth.user_id)
    return Result.ok(DocumentResponse.model_validate(document))


@router.put("/{document_id}", response_model=Result[DocumentResponse])
def update_document(
    document_id: int,
    data: DocumentPayload,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    if data.id is not None and data.id != document_id:
        raise ParamsError("Body id does not match path id", field="id")
    data.id = document_id

    service = DocumentService(db)
    document = service.update_document(data, auth.user_id)
    return Result.ok(DocumentResponse.model_validate(document))


@router.delete("/{document_id}", response_model=Result)
def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = DocumentService(db)
    service.delete_document(document_id, auth.user_id)
    return Result.ok()
