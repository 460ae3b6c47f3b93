"""Directory schemas."""

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, List

from .document import DocumentResponse


class DirectoryPayload(BaseModel):
    """Body of directory create and update requests.

    Every field is optional so shape problems surface as PARAMS_ERROR from
    the service layer rather than as framework validation errors.
    Update is a full replace: omitted fields fall back to their defaults.
    """
    id: Optional[int] = None
    project_id: Optional[int] = None
    parent_id: Optional[int] = None
    owner_id: Optional[int] = None
    name: Optional[str] = None
    sort_code: int = 0


class DirectoryResponse(BaseModel):
    """Flat directory in API responses."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    parent_id: int
    owner_id: int
    name: str
    sort_code: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DirectoryNode(DirectoryResponse):
    """Assembled directory: its documents and, when it has any, its children."""
    documents: List[DocumentResponse] = []
    sub_directories: Optional[List['DirectoryNode']] = None
