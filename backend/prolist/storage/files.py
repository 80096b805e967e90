import os
import re
import uuid
from typing import Protocol

import aiofiles
import aiofiles.os

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


class FileStorage(Protocol):
    async def save(self, file_name: str, content: bytes) -> str: ...

    async def read(self, file_ref: str) -> bytes: ...

    async def delete(self, file_ref: str) -> None: ...


class LocalFileStorage:
    """Writes document payloads under the upload directory.

    The returned file reference is the full path of the stored file.
    """

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    async def save(self, file_name: str, content: bytes) -> str:
        stored_filename = f"{uuid.uuid4()}_{safe_filename(file_name)}"
        file_path = os.path.join(self.upload_dir, stored_filename)

        os.makedirs(self.upload_dir, exist_ok=True)

        async with aiofiles.open(file_path, "wb") as f:
            await f.write(content)

        return file_path

    async def read(self, file_ref: str) -> bytes:
        async with aiofiles.open(file_ref, "rb") as f:
            return await f.read()

    async def delete(self, file_ref: str) -> None:
        if await aiofiles.os.path.exists(file_ref):
            await aiofiles.os.remove(file_ref)


def safe_filename(file_name: str) -> str:
    """Strip directories and characters that don't belong in a stored name."""
    base = os.path.basename(file_name or "upload")
    cleaned = _UNSAFE.sub("_", base).strip("._")
    return cleaned or "upload"


def get_file_extension(filename: str) -> str:
    """Extract the file extension without the dot, lowercased."""
    _, ext = os.path.splitext(filename)
    return ext.lstrip(".").lower()
