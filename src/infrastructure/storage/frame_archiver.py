"""
Empacotamento de diretórios de frames em ZIP.
"""
import zipfile
from pathlib import Path

from src.domain.exceptions import StorageError


def create_frames_archive(source_dir: Path, archive_path: Path) -> int:
    """
    Compacta os arquivos do diretório (sem subdiretórios) em um ZIP.

    Args:
        source_dir: Diretório com os frames
        archive_path: Caminho do ZIP a criar (fora de source_dir)

    Returns:
        int: Tamanho do ZIP em bytes

    Raises:
        StorageError: Se o diretório não existir ou a escrita falhar
    """
    if not source_dir.is_dir():
        raise StorageError(f"Frames directory not found: {source_dir}")

    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for frame in sorted(source_dir.iterdir()):
                if frame.is_file():
                    archive.write(frame, arcname=frame.name)
    except OSError as e:
        raise StorageError(f"Failed to create archive {archive_path.name}: {e}") from e

    return archive_path.stat().st_size
