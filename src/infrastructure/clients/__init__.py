"""HTTP clients for neighbouring services."""
from src.infrastructure.clients.auth_service_client import AuthServiceClient

__all__ = ["AuthServiceClient"]
