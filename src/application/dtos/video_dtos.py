"""
DTOs (Data Transfer Objects) do serviço de vídeo.
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from src.domain.entities import Video, VideoStatus


class UploadedFileDTO(BaseModel):
    """DTO para arquivo recebido no upload."""

    original_name: str = Field(..., description="Nome original do arquivo")
    mime_type: str = Field(..., description="MIME type informado pelo cliente")
    size: int = Field(..., ge=0, description="Tamanho em bytes")
    content: bytes = Field(..., description="Conteúdo do arquivo", repr=False)


class ProcessVideoRequestDTO(BaseModel):
    """DTO para requisição de processamento (extração de frames)."""

    priority: Optional[int] = Field(
        default=None,
        ge=0,
        le=100,
        description="Prioridade informada pelo cliente (registrada no job)"
    )
    frames_per_second: Optional[float] = Field(
        default=None,
        gt=0,
        le=30,
        description="Frames extraídos por segundo de vídeo",
        examples=[1, 0.5, 5]
    )
    output_format: Optional[Literal["png", "jpg", "jpeg"]] = Field(
        default=None,
        description="Formato das imagens geradas"
    )
    compression_quality: Optional[int] = Field(
        default=None,
        ge=1,
        le=100,
        description="Qualidade de compressão (1-100)"
    )
    max_width: Optional[int] = Field(default=None, gt=0, description="Largura máxima dos frames")
    max_height: Optional[int] = Field(default=None, gt=0, description="Altura máxima dos frames")


class VideoResponseDTO(BaseModel):
    """DTO para projeção de vídeo."""

    id: str = Field(..., description="ID único do vídeo")
    filename: str = Field(..., description="Nome atribuído pelo storage")
    original_name: str = Field(..., description="Nome original do arquivo")
    mime_type: str
    size: int = Field(..., description="Tamanho em bytes")
    duration: Optional[float] = Field(None, description="Duração em segundos")
    status: VideoStatus
    processed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    processing_attempts: int = 0
    metadata: Optional[Dict[str, Any]] = None
    download_url: Optional[str] = Field(
        None,
        description="URL temporária do pacote de frames (apenas COMPLETED)"
    )
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, video: Video, download_url: Optional[str] = None) -> "VideoResponseDTO":
        """Cria o DTO a partir da entidade."""
        return cls(
            id=video.id,
            filename=video.filename,
            original_name=video.original_name,
            mime_type=video.mime_type,
            size=video.size,
            duration=video.duration,
            status=video.status,
            processed_at=video.processed_at,
            error_message=video.error_message,
            processing_attempts=video.processing_attempts,
            metadata=video.metadata.to_dict() if video.metadata else None,
            download_url=download_url if video.status == VideoStatus.COMPLETED else None,
            created_at=video.created_at,
            updated_at=video.updated_at,
        )


class VideoListResponseDTO(BaseModel):
    """DTO para listagem paginada de vídeos."""

    videos: List[VideoResponseDTO]
    total: int = Field(..., description="Total de vídeos no filtro")
    page: int
    limit: int
    total_pages: int


class DownloadUrlDTO(BaseModel):
    """DTO para URL de download."""

    download_url: str
    expires_in: int = Field(..., description="Validade da URL em segundos")


class ProcessingStatsDTO(BaseModel):
    """DTO para estatísticas de processamento."""

    jobs: Dict[str, int] = Field(..., description="Jobs por status (inclui total)")
    videos: Dict[str, int] = Field(..., description="Vídeos por status")
