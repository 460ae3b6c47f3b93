"""Business logic services."""

from .directory_service import DirectoryService
from .document_service import DocumentService
from .history_service import HistoryService
from .tree_service import TreeAssembler

__all__ = ["DirectoryService", "DocumentService", "HistoryService", "TreeAssembler"]
