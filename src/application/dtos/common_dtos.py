"""
DTOs compartilhados pelos serviços HTTP (envelope de resposta, health check).
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ApiResponseDTO(BaseModel):
    """Envelope padrão de resposta."""

    success: bool = Field(default=True)
    data: Optional[Any] = Field(default=None)
    message: str = Field(default="")


class ErrorResponseDTO(BaseModel):
    """DTO padronizado para respostas de erro."""

    success: bool = Field(default=False)
    data: None = None
    message: str = Field(..., description="Mensagem legível do erro")
    error: str = Field(..., description="Tipo/classe do erro")
    request_id: Optional[str] = Field(None, description="ID da requisição para tracking")

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "data": None,
                "message": "Video not found",
                "error": "VideoNotFoundError",
                "request_id": "abc-123-def-456",
            }
        }


class HealthCheckDTO(BaseModel):
    """DTO para health check."""

    status: str = Field(..., description="Status do serviço")
    service: str = Field(..., description="Nome do serviço")
    version: str = Field(..., description="Versão do serviço")
    uptime_seconds: float = Field(..., description="Tempo de atividade em segundos")


class ReadinessCheckDTO(BaseModel):
    """DTO para readiness check."""

    status: str = Field(..., description="ready ou not_ready")
    checks: Dict[str, bool] = Field(..., description="Resultado por dependência")
