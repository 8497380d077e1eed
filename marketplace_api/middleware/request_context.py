"""
Request context middleware: request ids, timing headers and request logging.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from marketplace_api.services.error_handler import ErrorHandlerService
from marketplace_api.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Assigns every request an 8-character id, rejects oversized bodies,
    and reports processing time. Requests slower than
    slow_request_threshold are logged at WARNING.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 10 * 1024 * 1024,
        slow_request_threshold: float = 2.0,
        enable_request_logging: bool = True
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.slow_request_threshold = slow_request_threshold
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()

        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_request_size:
            max_mb = self.max_request_size / (1024 * 1024)
            response = ErrorHandlerService.handle_api_exception(
                ValidationError(f"Request body exceeds maximum allowed size ({max_mb:.1f}MB)"),
                request
            )
        else:
            try:
                response = await call_next(request)
            except Exception as exc:
                # Errors with no registered handler still leave as an envelope
                response = ErrorHandlerService.handle_unexpected_error(exc, request)

        processing_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"

        if self.enable_request_logging:
            self._log_response(request, response, request_id, processing_time)

        return response

    def _log_response(self, request: Request, response: Response, request_id: str, processing_time: float) -> None:
        endpoint = f"{request.method} {request.url.path}"
        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "processing_time": processing_time,
        }

        if processing_time > self.slow_request_threshold:
            logger.warning(f"SLOW REQUEST [{request_id}]: {endpoint} - {processing_time:.3f}s", extra=extra)
        else:
            logger.info(
                f"Request [{request_id}]: {endpoint} -> {response.status_code} ({processing_time:.3f}s)",
                extra=extra
            )
