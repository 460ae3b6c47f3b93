"""Document history schemas."""

from pydantic import BaseModel, ConfigDict
from datetime import datetime


class DocumentHistoryResponse(BaseModel):
    """One content snapshot."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    document_id: int
    content: str
    saved_time: datetime
