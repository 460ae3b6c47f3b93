"""Pydantic schemas for request/response validation."""

from .directory import DirectoryPayload, DirectoryResponse, DirectoryNode
from .document import DocumentPayload, DocumentResponse
from .history import DocumentHistoryResponse
from .result import Result

__all__ = [
    "DirectoryPayload",
    "DirectoryResponse",
    "DirectoryNode",
    "DocumentPayload",
    "DocumentResponse",
    "DocumentHistoryResponse",
    "Result",
]
