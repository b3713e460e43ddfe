"""Monitoring and observability infrastructure."""
from src.infrastructure.monitoring.logging_setup import setup_logging

__all__ = ["setup_logging"]
