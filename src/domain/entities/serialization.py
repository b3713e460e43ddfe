"""Helpers de serialização compartilhados pelas entidades."""
from datetime import datetime
from typing import Optional


def datetime_to_str(value: Optional[datetime]) -> Optional[str]:
    """Converte datetime para ISO 8601 (ou None)."""
    return value.isoformat() if value else None


def str_to_datetime(value: Optional[str]) -> Optional[datetime]:
    """Converte ISO 8601 para datetime (ou None)."""
    return datetime.fromisoformat(value) if value else None
