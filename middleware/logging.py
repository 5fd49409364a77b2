"""
Meal Planner Logging Middleware
Structured logging with request/response tracking and performance monitoring
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
import time
import uuid
from typing import Dict, Any
from contextvars import ContextVar

logger = structlog.get_logger()

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

SLOW_REQUEST_SECONDS = 2.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logging middleware that provides:
    - Request/response logging with unique IDs
    - Slow request warnings
    - Error tracking
    """

    def __init__(self, app):
        super().__init__(app)

        # Paths to exclude from detailed logging
        self.exclude_paths = {
            "/api/health", "/favicon.ico"
        }

        # Sensitive headers to mask in logs
        self.sensitive_headers = {
            "authorization", "cookie", "x-api-key", "x-auth-token"
        }

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        request_id_var.set(request_id)
        user_id_var.set(request.headers.get("x-user-id", ""))

        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        request_info = self._extract_request_info(request, request_id)
        logger.info("Request started", **request_info, event_type="request_start")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                **request_info,
                process_time=round(time.time() - start_time, 4),
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )
            raise

        process_time = time.time() - start_time
        logger.log(
            self._determine_log_level(response.status_code),
            "Request completed",
            **request_info,
            status_code=response.status_code,
            process_time=round(process_time, 4),
            event_type="request_complete"
        )

        if process_time > SLOW_REQUEST_SECONDS:
            logger.warning(
                "Slow request detected",
                endpoint=f"{request.method} {request.url.path}",
                response_time=process_time,
                event_type="slow_request"
            )

        response.headers["X-Request-ID"] = request_id
        return response

    def _extract_request_info(self, request: Request, request_id: str) -> Dict[str, Any]:
        info = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "headers": self._filter_headers(dict(request.headers)),
        }
        user_id = user_id_var.get()
        if user_id:
            info["user_id"] = user_id
        return info

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        forwarded = request.headers.get("x-real-ip")
        if forwarded:
            return forwarded

        return request.client.host if request.client else "unknown"

    def _filter_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Filter sensitive headers from logs"""
        return {
            key: "***MASKED***" if key.lower() in self.sensitive_headers else value
            for key, value in headers.items()
        }

    def _determine_log_level(self, status_code: int) -> int:
        if status_code >= 500:
            return 40  # ERROR
        elif status_code >= 400:
            return 30  # WARNING
        return 20  # INFO


# Utility functions for structured logging
def get_request_id() -> str:
    """Get current request ID from context"""
    return request_id_var.get()


def get_user_id() -> str:
    """Get current user ID from context"""
    return user_id_var.get()


def log_business_event(event: str, data: Dict[str, Any] = None):
    """Log business events for analytics"""
    logger.info(
        "Business event",
        request_id=get_request_id(),
        user_id=get_user_id(),
        business_event=event,
        data=data or {},
        event_type="business_event"
    )
