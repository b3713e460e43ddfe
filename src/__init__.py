"""Video platform backend services."""
