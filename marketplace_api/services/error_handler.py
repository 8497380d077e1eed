"""
Error handling service producing envelope-shaped error responses.
Every failure leaves the API as {success: false, message, data: null, errors}.
"""

from typing import Any, Dict, List, Optional
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from marketplace_api.schemas.envelope import error_body
from marketplace_api.utils.exceptions import APIException, RouteNotFoundError
from marketplace_api.utils.messages import ErrorMessages

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Formats and logs errors consistently across the application.
    Handled API errors log at WARNING, store and unexpected errors at ERROR.
    """

    @staticmethod
    def _request_id(request: Optional[Request]) -> Optional[str]:
        if request is None:
            return None
        return getattr(request.state, "request_id", None)

    @staticmethod
    def internal_error_message(exception: Exception) -> str:
        """Message for a 500 response: the fixed prefix plus the underlying message."""
        return f"{ErrorMessages.INTERNAL_SERVER_ERROR}{exception}"

    @staticmethod
    def format_validation_details(exception: RequestValidationError) -> List[Dict[str, Any]]:
        """Per-field details for a request validation failure."""
        details = []
        for error in exception.errors():
            loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
            details.append({
                "field": ".".join(loc) or "body",
                "message": error.get("msg", ""),
                "type": error.get("type", ""),
            })
        return details

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        request_id = ErrorHandlerService._request_id(request)
        log = logger.error if exception.status_code >= 500 else logger.warning
        log(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "path": request.url.path if request else None,
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_body(exception.detail, exception.errors),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(exception: RequestValidationError, request: Optional[Request] = None) -> JSONResponse:
        """
        Request body, query or path parameters failed validation.
        Reported as a 400 ValidationError with the field details in errors.
        """
        details = ErrorHandlerService.format_validation_details(exception)
        logger.warning(
            f"Validation Error [{ErrorHandlerService._request_id(request)}]: {len(details)} field errors",
            extra={
                "path": request.url.path if request else None,
                "validation_errors": details,
            }
        )

        return JSONResponse(
            status_code=400,
            content=error_body(ErrorMessages.REQUEST_VALIDATION_FAILED, details)
        )

    @staticmethod
    def handle_database_error(exception: SQLAlchemyError, request: Optional[Request] = None) -> JSONResponse:
        logger.error(
            f"Database Error [{ErrorHandlerService._request_id(request)}]: "
            f"{type(exception).__name__} - {exception}",
            extra={"path": request.url.path if request else None},
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=error_body(ErrorHandlerService.internal_error_message(exception))
        )

    @staticmethod
    def handle_http_exception(exception: StarletteHTTPException, request: Optional[Request] = None) -> JSONResponse:
        """
        Framework-raised HTTP errors. An unmatched route becomes RouteNotFound.
        """
        if exception.status_code == 404:
            return ErrorHandlerService.handle_api_exception(RouteNotFoundError(), request)

        if exception.status_code == 405:
            message = ErrorMessages.METHOD_NOT_ALLOWED
        else:
            message = str(exception.detail)

        logger.warning(
            f"HTTP Exception [{ErrorHandlerService._request_id(request)}]: {exception.status_code} - {message}",
            extra={"path": request.url.path if request else None}
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_body(message),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        logger.error(
            f"Unexpected Error [{ErrorHandlerService._request_id(request)}]: "
            f"{type(exception).__name__} - {exception}",
            extra={"path": request.url.path if request else None},
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=error_body(ErrorHandlerService.internal_error_message(exception))
        )
