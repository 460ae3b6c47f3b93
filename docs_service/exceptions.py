"""Custom exception hierarchy for the docs service."""

from enum import Enum
from typing import Optional, Dict, Any


class ResultCode(str, Enum):
    """Machine-readable outcome codes carried by every API response."""

    OK = "OK"

    # Input shape
    PARAMS_ERROR = "PARAMS_ERROR"

    # Identity & ownership
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Store state
    DATA_NOT_FOUND = "DATA_NOT_FOUND"
    DATA_CANNOT_DELETE = "DATA_CANNOT_DELETE"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DocsException(Exception):
    """
    Base exception for all service errors.

    Carries what the failure envelope needs:
    - Human-readable message
    - Result code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        code: ResultCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


class ParamsError(DocsException):
    """Input failed structural validation."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ResultCode.PARAMS_ERROR,
            status_code=400,
            details=details
        )


class AuthenticationError(DocsException):
    """Request lacks valid authentication credentials."""

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(
            message,
            ResultCode.UNAUTHORIZED,
            status_code=401,
        )


class ForbiddenError(DocsException):
    """Acting user does not own the entity."""

    def __init__(self, message: str = "You do not own this resource"):
        super().__init__(
            message,
            ResultCode.FORBIDDEN,
            status_code=403,
        )


class DataNotFoundError(DocsException):
    """Referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(
            f"{entity.capitalize()} not found: {entity_id}",
            ResultCode.DATA_NOT_FOUND,
            status_code=404,
            details={"entity": entity, "id": entity_id}
        )


class DirectoryNotFoundError(DataNotFoundError):

    def __init__(self, directory_id: int):
        super().__init__("directory", directory_id)


class DocumentNotFoundError(DataNotFoundError):

    def __init__(self, document_id: int):
        super().__init__("document", document_id)


class DataCannotDeleteError(DocsException):
    """Directory still holds sub-directories or documents."""

    def __init__(self, directory_id: int, sub_directories: int, documents: int):
        super().__init__(
            f"Directory {directory_id} is not empty",
            ResultCode.DATA_CANNOT_DELETE,
            status_code=409,
            details={
                "directory_id": directory_id,
                "sub_directories": sub_directories,
                "documents": documents,
            }
        )
