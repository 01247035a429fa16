"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
- In-memory rate limiting
"""

from core.logging import configure_logging, get_logger
from core.rate_limit import RateLimitDecision, RateLimiter, get_parse_rate_limiter

__all__ = [
    "configure_logging",
    "get_logger",
    "RateLimitDecision",
    "RateLimiter",
    "get_parse_rate_limiter",
]
