"""Exception handlers turning failures into the result envelope."""

import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import DocsException, ResultCode
from ..schemas.result import Result

logger = logging.getLogger(__name__)


async def docs_exception_handler(request: Request, exc: DocsException) -> JSONResponse:
    """Log the failure and return ``Result.fail`` with the exception's status code."""
    logger.warning(
        f"Request failed: {exc.code.value}",
        extra={
            "code": exc.code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=Result.from_exception(exc).model_dump(mode="json"),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed path parameters or bodies are PARAMS_ERROR like any other bad input."""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": errors},
    )

    return JSONResponse(
        status_code=400,
        content=Result.fail(
            ResultCode.PARAMS_ERROR, "Request validation failed", {"errors": errors}
        ).model_dump(mode="json"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything the services did not anticipate is INTERNAL_ERROR, still in the envelope."""
    request_id = getattr(request.state, "request_id", None)
    logger.exception(
        "Unhandled error",
        extra={"path": request.url.path, "method": request.method, "request_id": request_id},
    )

    response = JSONResponse(
        status_code=500,
        content=Result.fail(ResultCode.INTERNAL_ERROR, "Internal server error").model_dump(mode="json"),
    )
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response
