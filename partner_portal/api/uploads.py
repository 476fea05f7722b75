from __future__ import annotations

from fastapi import UploadFile

from partner_portal.config import settings
from partner_portal.exceptions import UploadTooLarge


_CHUNK_SIZE = 1024 * 1024


async def read_upload(upload: UploadFile, *, max_bytes: int | None = None) -> bytes:
    """Buffer an upload in memory, refusing anything above ``max_bytes``."""

    limit = settings.max_upload_bytes if max_bytes is None else max_bytes
    chunks: list[bytes] = []
    total = 0

    while chunk := await upload.read(_CHUNK_SIZE):
        total += len(chunk)
        if total > limit:
            raise UploadTooLarge(limit)
        chunks.append(chunk)

    return b"".join(chunks)
