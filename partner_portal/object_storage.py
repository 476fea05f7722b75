"""Object storage for certificate and document bytes.

``S3ObjectStorage`` talks to any S3-compatible service through boto3 (AWS,
MinIO, LocalStack via ``s3_endpoint_url``). boto3 is blocking, so calls run
in the threadpool.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from partner_portal.config import Settings, settings
from partner_portal.exceptions import NotFound, StorageBackendError


logger = logging.getLogger("portal.storage")


@dataclass(frozen=True)
class StoredObject:
    path: str
    url: str


class ObjectStorage(abc.ABC):
    bucket: str

    @abc.abstractmethod
    async def put(self, key: str, data: bytes, *, content_type: str) -> StoredObject: ...

    @abc.abstractmethod
    async def get(self, key: str) -> bytes: ...

    @abc.abstractmethod
    async def delete(self, key: str) -> None: ...

    @abc.abstractmethod
    def public_url(self, key: str) -> str: ...

    @abc.abstractmethod
    async def check(self) -> bool:
        """Return True when the bucket is reachable."""


class InMemoryObjectStorage(ObjectStorage):
    def __init__(self, bucket: str, *, base_url: str = "memory://") -> None:
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")
        self.objects: dict[str, tuple[bytes, str]] = {}

    async def put(self, key: str, data: bytes, *, content_type: str) -> StoredObject:
        self.objects[key] = (data, content_type)
        return StoredObject(path=key, url=self.public_url(key))

    async def get(self, key: str) -> bytes:
        try:
            return self.objects[key][0]
        except KeyError:
            raise NotFound(f"Object not found: {key}") from None

    async def delete(self, key: str) -> None:
        self.objects.pop(key, None)

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/{self.bucket}/{key}"

    async def check(self) -> bool:
        return True


def _error_code(exc: Exception) -> str | None:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return type(exc).__name__


class S3ObjectStorage(ObjectStorage):
    def __init__(self, client: Any, bucket: str, *, public_base_url: str | None = None) -> None:
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

    @classmethod
    def from_settings(cls, bucket: str, cfg: Settings = settings) -> "S3ObjectStorage":
        client = boto3.client(
            "s3",
            region_name=cfg.s3_region,
            endpoint_url=cfg.s3_endpoint_url,
            aws_access_key_id=cfg.s3_access_key_id,
            aws_secret_access_key=cfg.s3_secret_access_key,
        )
        return cls(client, bucket, public_base_url=cfg.storage_public_base_url or cfg.s3_endpoint_url)

    async def _call(self, op: str, key: str | None, fn, /, **kwargs: Any) -> Any:
        try:
            return await run_in_threadpool(fn, **kwargs)
        except (BotoCoreError, ClientError) as exc:
            logger.error("storage_error op=%s bucket=%s key=%s error=%s", op, self.bucket, key, exc)
            raise StorageBackendError(
                f"Object storage {op} failed",
                backend_detail=str(exc),
                code=_error_code(exc),
            ) from exc

    async def put(self, key: str, data: bytes, *, content_type: str) -> StoredObject:
        await self._call(
            "upload",
            key,
            self.client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
            CacheControl="max-age=3600",
        )
        logger.info("storage_put bucket=%s key=%s size=%d", self.bucket, key, len(data))
        return StoredObject(path=key, url=self.public_url(key))

    async def get(self, key: str) -> bytes:
        try:
            response = await run_in_threadpool(self.client.get_object, Bucket=self.bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in ("NoSuchKey", "404"):
                raise NotFound(f"Object not found: {key}") from exc
            raise StorageBackendError("Object storage download failed", backend_detail=str(exc), code=_error_code(exc)) from exc
        except BotoCoreError as exc:
            raise StorageBackendError("Object storage download failed", backend_detail=str(exc), code=_error_code(exc)) from exc
        return await run_in_threadpool(response["Body"].read)

    async def delete(self, key: str) -> None:
        await self._call("delete", key, self.client.delete_object, Bucket=self.bucket, Key=key)
        logger.info("storage_delete bucket=%s key=%s", self.bucket, key)

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    async def check(self) -> bool:
        try:
            await run_in_threadpool(self.client.head_bucket, Bucket=self.bucket)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("storage_check_failed bucket=%s error=%s", self.bucket, exc)
            return False
        return True


def build_object_storage(bucket: str, cfg: Settings = settings) -> ObjectStorage:
    if cfg.object_storage_backend == "memory":
        return InMemoryObjectStorage(bucket)
    if cfg.object_storage_backend == "s3":
        return S3ObjectStorage.from_settings(bucket, cfg)
    raise ValueError(f"Unknown object_storage_backend: {cfg.object_storage_backend}")


@lru_cache(maxsize=None)
def certificate_storage() -> ObjectStorage:
    return build_object_storage(settings.certificates_bucket)


@lru_cache(maxsize=None)
def document_storage() -> ObjectStorage:
    return build_object_storage(settings.documents_bucket)
