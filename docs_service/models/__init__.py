"""Database models."""

from .directory import Directory
from .document import Document
from .document_history import DocumentHistory

__all__ = ["Directory", "Document", "DocumentHistory"]
