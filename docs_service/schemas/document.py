"""Document schemas."""

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class DocumentPayload(BaseModel):
    """Body of document create and update requests (full replace on update)."""
    id: Optional[int] = None
    directory_id: Optional[int] = None
    owner_id: Optional[int] = None
    name: Optional[str] = None
    content: Optional[str] = None
    sort_code: int = 0

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "directory_id": 2,
                    "owner_id": 1,
                    "name": "Getting started",
                    "content": "# Getting started\n\nInstall the package...",
                    "sort_code": 10,
                }
            ]
        }
    }


class DocumentResponse(BaseModel):
    """Document in API responses."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    directory_id: int
    owner_id: int
    name: str
    content: Optional[str] = None
    sort_code: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
