"""
Validation middleware for request size, content type and per-client rate limiting.
Failures are rendered through ErrorHandlerService so they share the API's error envelope.
"""

from typing import Callable, Dict, Any
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

from cityhom.services.error_handler import ErrorHandlerService
from cityhom.utils.exceptions import BadRequestError, RateLimitExceededError

logger = logging.getLogger(__name__)


class ValidationMiddleware(BaseHTTPMiddleware):
    """
    Request preprocessing: body ceiling, fixed-window rate limit per client IP,
    JSON content type on API writes, request ids and optional request logging.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_request_size: int = 10 * 1024 * 1024,
        enable_request_logging: bool = False,
        enable_rate_limiting: bool = True,
        rate_limit_requests: int = 100,
        rate_limit_window_minutes: int = 10
    ):
        super().__init__(app)
        self.max_request_size = max_request_size
        self.enable_request_logging = enable_request_logging
        self.enable_rate_limiting = enable_rate_limiting
        self.rate_limit_requests = rate_limit_requests
        self.rate_limit_window = rate_limit_window_minutes * 60
        self.request_counts: Dict[str, Dict[str, Any]] = {}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.time()

        try:
            self._validate_request_size(request)
            if self.enable_rate_limiting:
                self._apply_rate_limiting(request)
            self._validate_content_type(request)

            if self.enable_request_logging:
                logger.info(f"Request [{request_id}]: {request.method} {request.url.path}")

            response = await call_next(request)

            if self.enable_request_logging:
                processing_time = time.time() - start_time
                logger.info(f"Response [{request_id}]: {response.status_code} - {processing_time:.3f}s")

            response.headers["X-Request-ID"] = request_id
            return response

        except (BadRequestError, RateLimitExceededError) as exc:
            response = ErrorHandlerService.handle_api_exception(exc, request)
            response.headers["X-Request-ID"] = request_id
            return response
        except Exception as exc:
            logger.error(
                f"Middleware error [{request_id}]: {type(exc).__name__} - {exc}",
                extra={"request_id": request_id, "path": request.url.path, "method": request.method},
                exc_info=True
            )
            return ErrorHandlerService.handle_unexpected_error(exc, request)

    def _validate_request_size(self, request: Request) -> None:
        """
        Raises:
            BadRequestError: If the declared body size exceeds the ceiling
        """
        content_length = request.headers.get("content-length")
        if not content_length:
            return
        try:
            size = int(content_length)
        except ValueError:
            raise BadRequestError("Invalid content-length header")
        if size > self.max_request_size:
            raise BadRequestError(
                f"Request size {size} bytes exceeds maximum allowed size {self.max_request_size} bytes"
            )

    def _apply_rate_limiting(self, request: Request) -> None:
        """
        Count the request against its client's current window.

        Raises:
            RateLimitExceededError: If the client used up its window
        """
        client_ip = self._get_client_ip(request)
        current_time = time.time()
        self._clean_rate_limit_data(current_time)

        client_data = self.request_counts.setdefault(
            client_ip, {"count": 0, "window_start": current_time}
        )

        if current_time - client_data["window_start"] > self.rate_limit_window:
            client_data["count"] = 0
            client_data["window_start"] = current_time

        if client_data["count"] >= self.rate_limit_requests:
            retry_after = int(self.rate_limit_window - (current_time - client_data["window_start"]))
            logger.warning(f"Rate limit exceeded for {client_ip}")
            raise RateLimitExceededError(max(retry_after, 1))

        client_data["count"] += 1

    def _validate_content_type(self, request: Request) -> None:
        """API writes with a body must be JSON."""
        if request.method not in ("POST", "PUT", "PATCH"):
            return
        content_type = request.headers.get("content-type", "")
        if request.url.path.startswith("/api/") and content_type and not content_type.startswith("application/json"):
            raise BadRequestError(f"Unsupported content type '{content_type}'. Expected 'application/json'")

    def _get_client_ip(self, request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"

    def _clean_rate_limit_data(self, current_time: float) -> None:
        expired_clients = [
            client_ip for client_ip, data in self.request_counts.items()
            if current_time - data["window_start"] > self.rate_limit_window * 2
        ]
        for client_ip in expired_clients:
            del self.request_counts[client_ip]
