"""Per-request id, timing headers and one access line per request."""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..core.logging_config import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _access_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's ``X-Request-ID`` or mint one, and echo it back."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:16]
        request.state.request_id = request_id
        reset_token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
            logger.error(
                "%s %s -> unhandled error",
                request.method,
                request.url.path,
                extra={"request_id": request_id, "duration_ms": elapsed_ms, "status_code": 500},
            )
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
            request_id_var.reset(reset_token)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms}ms"
        logger.log(
            _access_level(response.status_code),
            "%s %s -> %s",
            request.method,
            request.url.path,
            response.status_code,
            extra={"request_id": request_id, "duration_ms": elapsed_ms, "status_code": response.status_code},
        )
        return response
