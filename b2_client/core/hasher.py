"""Streaming SHA-1 hashing and chunked reading of local files."""

import hashlib
import stat
from collections.abc import AsyncGenerator
from pathlib import Path

import aiofiles
import aiofiles.os
import structlog

from b2_client.exceptions import FileAccessError
from b2_client.models.upload import FileDigest

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class ContentHasher:
    """
    Computes the content digest of local files without loading them in memory.

    Size and digest come from two independent passes (a stat call and a read
    stream). A file modified in between yields an inconsistent pair.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        """
        Args:
            chunk_size: Bytes read per chunk.
        """
        if chunk_size <= 0:
            msg = "chunk_size must be positive"
            raise ValueError(msg)
        self._chunk_size = chunk_size

    async def stat(self, file_path: Path) -> int:
        """
        Return the size of a regular file.

        Raises:
            FileAccessError: If the path is missing, unreadable or not a regular file.
        """
        try:
            st = await aiofiles.os.stat(file_path)
        except OSError as e:
            msg = f"Cannot stat file: {e.strerror or e}"
            raise FileAccessError(msg, path=str(file_path)) from e

        if not stat.S_ISREG(st.st_mode):
            msg = "Not a regular file"
            raise FileAccessError(msg, path=str(file_path))
        return st.st_size

    async def iter_chunks(self, file_path: Path) -> AsyncGenerator[bytes, None]:
        """
        Read a file sequentially in chunks.

        Yields:
            File content chunks of at most ``chunk_size`` bytes.

        Raises:
            FileAccessError: If the file cannot be opened or a read fails mid-stream.
        """
        try:
            async with aiofiles.open(file_path, "rb") as f:
                while chunk := await f.read(self._chunk_size):
                    yield chunk
        except OSError as e:
            msg = f"Cannot read file: {e.strerror or e}"
            raise FileAccessError(msg, path=str(file_path)) from e

    async def sha1(self, file_path: Path) -> str:
        """Compute the hex SHA-1 digest of a file's current content."""
        hasher = hashlib.sha1()
        async for chunk in self.iter_chunks(file_path):
            hasher.update(chunk)
        return hasher.hexdigest()

    async def digest(self, file_path: Path) -> FileDigest:
        """
        Compute the size and SHA-1 digest of a file.

        Args:
            file_path: Local file to inspect.

        Returns:
            FileDigest with hex SHA-1 and byte length.

        Raises:
            FileAccessError: If the file cannot be inspected or read.
        """
        byte_length = await self.stat(file_path)
        hex_digest = await self.sha1(file_path)
        logger.debug("File hashed", path=str(file_path), size=byte_length)
        return FileDigest(hex_digest=hex_digest, byte_length=byte_length)
