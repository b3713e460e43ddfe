"""Middlewares HTTP."""
from src.presentation.api.middlewares.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
