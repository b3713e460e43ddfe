"""
Settings module - Configurações centralizadas da aplicação usando Pydantic Settings.

Compartilhado pelos serviços de vídeo e de notificações e pelos workers Celery.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator


class Settings(BaseSettings):
    """Configurações da aplicação."""

    # Application
    app_name: str = Field(default="Video Processing Service", alias="APP_NAME")
    notifications_app_name: str = Field(default="Notification Service", alias="NOTIFICATIONS_APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    app_environment: str = Field(default="production", alias="APP_ENVIRONMENT")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    notifications_port: int = Field(default=8001, alias="NOTIFICATIONS_PORT")

    # Upload / Storage
    upload_dir: str = Field(default="./storage/uploads", alias="UPLOAD_DIR")
    frames_dir: str = Field(default="./storage", alias="FRAMES_DIR")
    max_upload_size_mb: int = Field(default=100, alias="MAX_UPLOAD_SIZE_MB")
    allowed_mime_types: str = Field(
        default="video/mp4,video/avi,video/mov,video/mkv,application/octet-stream",
        alias="ALLOWED_MIME_TYPES"
    )
    cleanup_frames_after_upload: bool = Field(default=True, alias="CLEANUP_FRAMES_AFTER_UPLOAD")

    # Processing
    max_processing_attempts: int = Field(default=3, alias="MAX_PROCESSING_ATTEMPTS")
    strict_result_validation: bool = Field(default=True, alias="STRICT_RESULT_VALIDATION")
    processing_lock_ttl_seconds: int = Field(default=2700, alias="PROCESSING_LOCK_TTL_SECONDS")
    job_retention_days: int = Field(default=30, alias="JOB_RETENTION_DAYS")

    # FFmpeg
    ffmpeg_path: str = Field(default="ffmpeg", alias="FFMPEG_PATH")
    ffprobe_path: str = Field(default="ffprobe", alias="FFPROBE_PATH")
    ffmpeg_timeout_seconds: int = Field(default=1800, alias="FFMPEG_TIMEOUT_SECONDS")

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")

    # Celery
    celery_broker_url: Optional[str] = Field(default=None, alias="CELERY_BROKER_URL")
    celery_result_backend: Optional[str] = Field(default=None, alias="CELERY_RESULT_BACKEND")
    celery_task_soft_time_limit: int = Field(default=2400, alias="CELERY_TASK_SOFT_TIME_LIMIT")
    celery_task_time_limit: int = Field(default=2700, alias="CELERY_TASK_TIME_LIMIT")

    # S3 / Object store
    s3_endpoint_url: Optional[str] = Field(default=None, alias="S3_ENDPOINT_URL")
    s3_public_endpoint_url: Optional[str] = Field(default=None, alias="S3_PUBLIC_ENDPOINT_URL")
    s3_region: str = Field(default="us-east-1", alias="S3_REGION")
    s3_bucket: str = Field(default="video-processing", alias="S3_BUCKET")
    s3_access_key_id: Optional[str] = Field(default=None, alias="S3_ACCESS_KEY_ID")
    s3_secret_access_key: Optional[str] = Field(default=None, alias="S3_SECRET_ACCESS_KEY")
    s3_auto_create_bucket: bool = Field(default=False, alias="S3_AUTO_CREATE_BUCKET")
    signed_url_ttl_seconds: int = Field(default=3600, alias="SIGNED_URL_TTL_SECONDS")

    # Auth service (identidade)
    auth_service_url: str = Field(default="http://localhost:3001", alias="AUTH_SERVICE_URL")
    auth_service_timeout: float = Field(default=5.0, alias="AUTH_SERVICE_TIMEOUT")
    auth_service_retries: int = Field(default=2, alias="AUTH_SERVICE_RETRIES")
    circuit_breaker_failure_threshold: int = Field(default=5, alias="CIRCUIT_BREAKER_FAILURE_THRESHOLD")
    circuit_breaker_timeout_seconds: int = Field(default=60, alias="CIRCUIT_BREAKER_TIMEOUT_SECONDS")

    # Notifications
    smtp_host: Optional[str] = Field(default=None, alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: Optional[str] = Field(default=None, alias="SMTP_USER")
    smtp_password: Optional[str] = Field(default=None, alias="SMTP_PASSWORD")
    smtp_from: str = Field(default="noreply@videoplatform.com", alias="SMTP_FROM")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    push_gateway_url: Optional[str] = Field(default=None, alias="PUSH_GATEWAY_URL")
    push_timeout: float = Field(default=10.0, alias="PUSH_TIMEOUT")
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    # API
    enable_cors: bool = Field(default=True, alias="ENABLE_CORS")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")
    log_file: str = Field(default="./logs/app.log", alias="LOG_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida o nível de log."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v

    @field_validator(
        "max_upload_size_mb",
        "max_processing_attempts",
        "processing_lock_ttl_seconds",
        "ffmpeg_timeout_seconds",
        "signed_url_ttl_seconds",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Valida limites numéricos positivos."""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @model_validator(mode="after")
    def validate_lock_ttl(self) -> "Settings":
        """A concessão do job não pode sobreviver ao time limit da task."""
        if self.processing_lock_ttl_seconds > self.celery_task_time_limit:
            raise ValueError(
                "PROCESSING_LOCK_TTL_SECONDS must not exceed CELERY_TASK_TIME_LIMIT"
            )
        return self

    def get_cors_origins(self) -> List[str]:
        """Retorna lista de origens CORS permitidas."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    def get_allowed_mime_types(self) -> List[str]:
        """Retorna lista de MIME types aceitos no upload."""
        return [mime.strip() for mime in self.allowed_mime_types.split(",") if mime.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def broker_url(self) -> str:
        return self.celery_broker_url or self.redis_url

    @property
    def result_backend(self) -> str:
        return self.celery_result_backend or self.redis_url


# Instância global de configurações
settings = Settings()
