"""
Object store S3 (AWS, MinIO ou LocalStack) via boto3.

As chamadas do SDK são bloqueantes e rodam no executor padrão.
"""
import asyncio
import tempfile
from functools import partial
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from src.domain.exceptions import StorageError
from src.domain.interfaces import IObjectStore, StoredObject
from src.infrastructure.storage.frame_archiver import create_frames_archive

PROCESSED_PREFIX = "processed-videos"


class S3ObjectStore(IObjectStore):
    """Armazena os pacotes de frames em um bucket S3."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        public_endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        client=None
    ):
        """
        Inicializa o cliente. Não acessa a rede; use ensure_bucket().

        Args:
            bucket: Nome do bucket
            region: Região
            endpoint_url: Endpoint interno (MinIO/LocalStack)
            public_endpoint_url: Endpoint exposto aos clientes nas URLs assinadas
            access_key_id: Credencial
            secret_access_key: Credencial
            client: Cliente boto3 pré-construído (testes)
        """
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.public_endpoint_url = public_endpoint_url
        self.client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    async def _run(self, func, *args, **kwargs):
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, partial(func, *args, **kwargs))

    @staticmethod
    def object_key(owner_id: str, video_id: str) -> str:
        return f"{PROCESSED_PREFIX}/{owner_id}/{video_id}_frames.zip"

    async def ensure_bucket(self) -> None:
        """Cria o bucket se ele ainda não existir (idempotente)."""
        try:
            await self._run(self.client.head_bucket, Bucket=self.bucket)
            logger.debug(f"S3 bucket available: {self.bucket}")
            return
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code not in ("404", "NoSuchBucket", "NotFound"):
                raise StorageError(f"Failed to check bucket {self.bucket}: {e}") from e

        try:
            await self._run(self.client.create_bucket, Bucket=self.bucket)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code not in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                raise StorageError(f"Failed to create bucket {self.bucket}: {e}") from e

        logger.info(f"✅ S3 bucket created: {self.bucket}")

    async def upload(self, local_dir: Path, owner_id: str, video_id: str) -> StoredObject:
        key = self.object_key(owner_id, video_id)

        with tempfile.TemporaryDirectory(prefix="frames-archive-") as tmp:
            archive_path = Path(tmp) / f"{video_id}_frames.zip"
            size = await self._run(create_frames_archive, local_dir, archive_path)

            try:
                await self._run(
                    self.client.upload_file,
                    str(archive_path),
                    self.bucket,
                    key,
                    ExtraArgs={"ContentType": "application/zip"},
                )
            except (BotoCoreError, ClientError) as e:
                raise StorageError(f"Failed to upload {key}: {e}") from e

        logger.info(f"☁️  Uploaded frames archive: s3://{self.bucket}/{key} ({size} bytes)")
        return StoredObject(key=key, size_bytes=size)

    async def signed_url(self, key: str, ttl_seconds: int = 3600) -> str:
        try:
            url = await self._run(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=ttl_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to sign URL for {key}: {e}") from e

        if self.endpoint_url and self.public_endpoint_url:
            url = url.replace(self.endpoint_url, self.public_endpoint_url, 1)
        return url

    async def delete(self, key: str) -> bool:
        try:
            await self._run(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e
        return True

    async def exists(self, key: str) -> bool:
        try:
            await self._run(self.client.head_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(f"Failed to check {key}: {e}") from e
        return True
