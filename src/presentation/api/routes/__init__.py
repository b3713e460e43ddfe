"""API routes."""
from src.presentation.api.routes import notifications, system, videos

__all__ = ["notifications", "system", "videos"]
