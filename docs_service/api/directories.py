"""Directory API: project tree, children, and single-directory CRUD.

Endpoints are thin: DirectoryService owns validation, ownership checks and
the tree assembly. Every response is a ``Result`` envelope.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..exceptions import ParamsError
from ..schemas.directory import DirectoryNode, DirectoryPayload, DirectoryResponse
from ..schemas.result import Result
from ..services import DirectoryService

router = APIRouter(prefix="/api/directories", tags=["directories"])


@router.get("/projects/{project_id}", response_model=Result[List[DirectoryNode]])
def get_project_tree(
    project_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Root directories of a project with their documents and full subtrees."""
    service = DirectoryService(db)
    return Result.ok(service.get_project_tree(project_id, auth.user_id))


@router.get("/parents/{parent_id}", response_model=Result[List[DirectoryResponse]])
def list_children(
    parent_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Direct children of a directory, not assembled."""
    service = DirectoryService(db)
    children = service.list_children(parent_id, auth.user_id)
    return Result.ok([DirectoryResponse.model_validate(d) for d in children])


@router.get("/{directory_id}", response_model=Result[Optional[DirectoryResponse]])
def get_directory(
    directory_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """A missing directory is a successful, empty result."""
    service = DirectoryService(db)
    directory = service.get_directory(directory_id, auth.user_id)
    return Result.ok(DirectoryResponse.model_validate(directory) if directory else None)


@router.post("", response_model=Result[DirectoryResponse], status_code=201)
def create_directory(
    data: DirectoryPayload,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = DirectoryService(db)
    directory = service.create_directory(data, auth.user_id)
    return Result.ok(DirectoryResponse.model_validate(directory))


@router.put("/{directory_id}", response_model=Result[DirectoryResponse])
def update_directory(
    directory_id: int,
    data: DirectoryPayload,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Full replace. The body id, when present, must match the path."""
    if data.id is not None and data.id != directory_id:
        raise ParamsError("Body id does not match path id", field="id")
    data.id = directory_id

    service = DirectoryService(db)
    directory = service.update_directory(data, auth.user_id)
    return Result.ok(DirectoryResponse.model_validate(directory))


@router.delete("/{directory_id}", response_model=Result)
def delete_directory(
    directory_id: int,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Only empty directories can be deleted."""
    service = DirectoryService(db)
    service.delete_directory(directory_id, auth.user_id)
    return Result.ok()
