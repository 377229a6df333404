"""
Upload-related domain models.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self


@dataclass(frozen=True, kw_only=True)
class UploadTarget:
    """Where a local file should be uploaded to."""

    bucket_id: str
    file_path: Path

    @property
    def file_name(self) -> str:
        """Name the file is stored under (the path's basename)."""
        return self.file_path.name


@dataclass(frozen=True, kw_only=True)
class UploadUrlGrant:
    """
    Single-use upload endpoint returned by ``b2_get_upload_url``.

    Never cached: a fresh grant is requested for every upload.
    """

    bucket_id: str
    upload_url: str
    upload_token: str = field(repr=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(
            bucket_id=data["bucketId"],
            upload_url=data["uploadUrl"],
            upload_token=data["authorizationToken"],
        )


@dataclass(frozen=True, kw_only=True)
class FileDigest:
    """
    Content fingerprint of a local file.

    ``byte_length`` comes from a metadata probe, ``hex_digest`` from a separate
    read pass, so they may describe different snapshots of a changing file.
    """

    hex_digest: str
    byte_length: int
    algorithm: str = "sha1"


@dataclass(frozen=True, kw_only=True)
class UploadedFile:
    """Upload confirmation returned by the service."""

    file_id: str
    file_name: str
    bucket_id: str
    content_length: int
    content_sha1: str
    content_type: str
    account_id: str | None = None
    file_info: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(
            file_id=data["fileId"],
            file_name=data["fileName"],
            bucket_id=data["bucketId"],
            content_length=data["contentLength"],
            content_sha1=data["contentSha1"],
            content_type=data["contentType"],
            account_id=data.get("accountId"),
            file_info=data.get("fileInfo") or {},
        )
