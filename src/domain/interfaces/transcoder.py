"""
Interface: ITranscoder
Contrato do colaborador de transcodificação (FFmpeg).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from src.domain.value_objects import ProcessingOptions, VideoMetadata


@dataclass
class FrameExtraction:
    """Resultado bruto da extração de frames."""

    frames: List[Path] = field(default_factory=list)
    total_frames: int = 0
    duration: float = 0.0

    @property
    def extracted_frames(self) -> int:
        return len(self.frames)


class ITranscoder(ABC):
    """Interface para extração de frames e leitura de metadados de vídeos."""

    @abstractmethod
    async def extract_frames(
        self,
        input_path: Path,
        output_dir: Path,
        options: ProcessingOptions
    ) -> FrameExtraction:
        """
        Extrai frames do vídeo para o diretório de saída.

        Args:
            input_path: Arquivo de vídeo
            output_dir: Diretório de saída (já existente)
            options: fps, formato, qualidade e dimensões máximas

        Returns:
            FrameExtraction: Frames gerados e total esperado

        Raises:
            TranscoderError: Se o FFmpeg falhar ou exceder o timeout
        """
        pass

    @abstractmethod
    async def read_metadata(self, path: Path) -> VideoMetadata:
        """
        Obtém metadados técnicos do vídeo.

        Raises:
            TranscoderError: Se o FFprobe falhar
        """
        pass
