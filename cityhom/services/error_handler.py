"""
Error handling service for consistent error response formatting and logging.
Every failure leaves the API as {success: false, message, errors?}.
"""

from typing import Dict, Any, Optional, List, Sequence
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from jose import JWTError, ExpiredSignatureError
from cityhom.utils.exceptions import APIException, ValidationError
import logging
import uuid

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds to request validation errors
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


class ErrorHandlerService:
    """
    Translates exceptions into the failure envelope.
    Each translated error is logged with a short request id.
    """

    @staticmethod
    def format_error_response(message: str, errors: Optional[List[str]] = None) -> Dict[str, Any]:
        response: Dict[str, Any] = {"success": False, "message": message}
        if errors:
            response["errors"] = errors
        return response

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        """Handle custom API exceptions with their own status and message."""
        request_id = ErrorHandlerService._generate_request_id()
        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        errors = exception.field_errors if isinstance(exception, ValidationError) else None
        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(exception.detail, errors),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(exception, request: Optional[Request] = None) -> JSONResponse:
        """
        Handle request and pydantic validation errors.

        Args:
            exception: RequestValidationError or pydantic ValidationError
            request: Optional FastAPI request object

        Returns:
            400 response listing "field.path: message" entries
        """
        request_id = ErrorHandlerService._generate_request_id()
        errors = ErrorHandlerService.format_validation_errors(exception.errors())

        logger.warning(
            f"Validation Error [{request_id}]: {len(errors)} field errors",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "validation_errors": errors
            }
        )

        return JSONResponse(
            status_code=400,
            content=ErrorHandlerService.format_error_response("Validation Error", errors)
        )

    @staticmethod
    def format_validation_errors(raw_errors: Sequence[Dict[str, Any]]) -> List[str]:
        """Render pydantic error dicts as readable "path: message" strings."""
        formatted = []
        for error in raw_errors:
            loc = list(error.get("loc") or ())
            if loc and loc[0] in _LOCATION_PREFIXES:
                loc = loc[1:]
            path = ".".join(str(part) for part in loc)

            message = error.get("msg", "Invalid value")
            ctx = error.get("ctx") or {}
            if error.get("type") == "value_error" and ctx.get("error") is not None:
                message = str(ctx["error"])

            formatted.append(f"{path}: {message}" if path else message)
        return formatted

    @staticmethod
    def handle_database_error(exception: SQLAlchemyError, request: Optional[Request] = None) -> JSONResponse:
        """Unique-constraint violations become 409; every other database error is opaque."""
        request_id = ErrorHandlerService._generate_request_id()

        if isinstance(exception, IntegrityError):
            message = ErrorHandlerService._duplicate_message(exception)
            logger.warning(f"Integrity Error [{request_id}]: {exception.orig}")
            return JSONResponse(
                status_code=409,
                content=ErrorHandlerService.format_error_response(message)
            )

        logger.error(
            f"Database Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={"request_id": request_id, "path": request.url.path if request else None},
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response("Internal Server Error")
        )

    @staticmethod
    def handle_jwt_error(exception: JWTError, request: Optional[Request] = None) -> JSONResponse:
        """Expired tokens are 401; any other token defect is 403."""
        request_id = ErrorHandlerService._generate_request_id()
        logger.warning(f"Token Error [{request_id}]: {type(exception).__name__} - {exception}")

        if isinstance(exception, ExpiredSignatureError):
            status_code, message = 401, "Unauthorized: Token expired"
        else:
            status_code, message = 403, "Forbidden: Invalid token"
        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(message)
        )

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Handle framework HTTP exceptions such as unknown routes."""
        request_id = ErrorHandlerService._generate_request_id()
        logger.warning(f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}")

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(str(exception.detail)),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        """Log with traceback; never leak details to the client."""
        request_id = ErrorHandlerService._generate_request_id()
        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={"request_id": request_id, "path": request.url.path if request else None},
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response("Internal Server Error")
        )

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _duplicate_message(exception: IntegrityError) -> str:
        """Name the duplicated field when the driver message reveals it."""
        error_msg = str(exception.orig).lower()
        if "email" in error_msg:
            return "Email address is already in use"
        if "phone_number" in error_msg:
            return "Phone number is already in use"
        return "Duplicate field value"
