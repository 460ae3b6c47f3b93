"""Data access repositories."""

from .base import BaseRepository
from .directory_repository import DirectoryRepository
from .document_repository import DocumentRepository
from .history_repository import DocumentHistoryRepository

__all__ = [
    "BaseRepository",
    "DirectoryRepository",
    "DocumentRepository",
    "DocumentHistoryRepository",
]
