"""Tagged result envelope returned by every endpoint."""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel

from ..exceptions import DocsException, ResultCode

T = TypeVar("T")


class Result(BaseModel, Generic[T]):
    """Either a success (optionally with data) or a failure with a code."""
    success: bool
    code: ResultCode
    message: str = ""
    data: Optional[T] = None
    details: Dict[str, Any] = {}

    @classmethod
    def ok(cls, data: Any = None) -> "Result":
        return cls(success=True, code=ResultCode.OK, message="ok", data=data)

    @classmethod
    def fail(
        cls,
        code: ResultCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> "Result":
        return cls(success=False, code=code, message=message, details=details or {})

    @classmethod
    def from_exception(cls, exc: DocsException) -> "Result":
        return cls.fail(exc.code, exc.message, exc.details)
