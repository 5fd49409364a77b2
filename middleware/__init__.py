"""
Meal Planner Middleware
Request logging and business event helpers
"""

from .logging import LoggingMiddleware, log_business_event, get_request_id

__all__ = [
    "LoggingMiddleware",
    "log_business_event",
    "get_request_id"
]
