"""
Exceções customizadas para a aplicação.

Hierarquia:
- Erros de domínio (validação, não encontrado, estado inválido) nunca são
  reprocessados pela fila.
- Erros de colaboradores (storage, transcoder, fila, notificação) são
  transitórios e ficam a cargo da política de retry da fila.
"""
from typing import Optional


class DomainException(Exception):
    """Exceção base para erros de domínio."""


class ValidationError(DomainException):
    """Erro de validação."""


class ResourceNotFoundError(DomainException):
    """Recurso não encontrado."""


class UnauthorizedError(DomainException):
    """Usuário não autorizado a executar a operação."""


class AuthenticationRequiredError(UnauthorizedError):
    """Requisição sem identidade do usuário."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class InvalidStateError(DomainException):
    """Entidade em estado que não permite a operação."""


class UploadError(DomainException):
    """Falha genérica no upload de vídeo."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to upload video: {reason}")


class ProcessingError(DomainException):
    """Falha genérica ao solicitar ou executar processamento."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to process video: {reason}")


# ============= VALIDAÇÃO / RECURSOS =============

class VideoValidationError(ValidationError):
    """Arquivo de vídeo rejeitado pelo gate de upload."""

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(reason)


class VideoNotFoundError(ResourceNotFoundError):
    """Vídeo inexistente (ou não pertencente ao usuário)."""

    def __init__(self, video_id: str):
        self.video_id = video_id
        super().__init__("Video not found")


class NotificationNotFoundError(ResourceNotFoundError):
    """Notificação inexistente."""

    def __init__(self, notification_id: str):
        self.notification_id = notification_id
        super().__init__(f"Notification {notification_id} not found")


class UserNotFoundError(ResourceNotFoundError):
    """Usuário inexistente no serviço de identidade."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class VideoNotProcessableError(InvalidStateError):
    """Vídeo não elegível para (re)processamento."""

    def __init__(self, status: str, attempts: int):
        self.status = status
        self.attempts = attempts
        super().__init__(
            f"Video cannot be processed. Status: {status}, Attempts: {attempts}"
        )


# ============= COLABORADORES (TRANSITÓRIOS) =============

class CollaboratorError(DomainException):
    """Erro transitório em colaborador externo."""


class StorageError(CollaboratorError):
    """Erro de armazenamento (disco local ou object store)."""


class TranscoderError(CollaboratorError):
    """Erro ao executar FFmpeg/FFprobe."""

    def __init__(self, command: str, stderr: str):
        self.command = command
        self.stderr = stderr
        super().__init__(f"FFmpeg command failed ({command}): {stderr[:200]}")


class QueueError(CollaboratorError):
    """Erro ao publicar ou consultar mensagens na fila."""


class NotificationDeliveryError(CollaboratorError):
    """Erro ao entregar e-mail ou push."""

    def __init__(self, channel: str, reason: str):
        self.channel = channel
        self.reason = reason
        super().__init__(f"Failed to deliver {channel} notification: {reason}")


class ServiceUnavailableError(CollaboratorError):
    """Serviço indisponível."""


class DegradedDependencyError(ServiceUnavailableError):
    """Dependência inacessível; o chamador deve usar um valor substituto."""

    def __init__(self, service: str, reason: str):
        self.service = service
        self.reason = reason
        super().__init__(f"Dependency '{service}' is degraded: {reason}")


class JobExecutionError(DomainException):
    """
    Falha registrada de um processing job.

    Lançada pelo processor depois de marcar Video/Job como FAILED, para que
    a fila aplique (ou não) sua política de retry.
    """

    def __init__(
        self,
        job_id: str,
        reason: str,
        retryable: bool,
        retry_delay_ms: Optional[int] = None
    ):
        self.job_id = job_id
        self.reason = reason
        self.retryable = retryable
        self.retry_delay_ms = retry_delay_ms
        super().__init__(f"Processing job {job_id} failed: {reason}")


class JobLeaseBusyError(JobExecutionError):
    """
    Concessão do job pertence a outra entrega (em execução ou de um worker
    encerrado). A entrega deve voltar depois que a concessão expirar.
    """

    def __init__(self, job_id: str, retry_delay_ms: int):
        super().__init__(
            job_id,
            "Processing job is leased by another delivery",
            retryable=True,
            retry_delay_ms=retry_delay_ms
        )
