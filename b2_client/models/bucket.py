"""
Bucket-related domain models.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Self


class BucketType(StrEnum):
    """Access policy of a bucket."""

    ALL_PUBLIC = "allPublic"
    ALL_PRIVATE = "allPrivate"
    SNAPSHOT = "snapshot"

    @classmethod
    def from_private(cls, is_private: bool) -> "BucketType":
        return cls.ALL_PRIVATE if is_private else cls.ALL_PUBLIC


@dataclass(frozen=True, kw_only=True)
class Bucket:
    """
    A named container for stored files.

    Attributes:
        bucket_id: Unique bucket identifier.
        bucket_name: Globally unique bucket name.
        bucket_type: Access policy.
        account_id: Owning account.
        bucket_info: User-defined metadata.
        revision: Revision counter, bumped on every update.
    """

    bucket_id: str
    bucket_name: str
    bucket_type: str
    account_id: str | None = None
    bucket_info: dict[str, Any] = field(default_factory=dict)
    revision: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Self:
        return cls(
            bucket_id=data["bucketId"],
            bucket_name=data["bucketName"],
            bucket_type=data["bucketType"],
            account_id=data.get("accountId"),
            bucket_info=data.get("bucketInfo") or {},
            revision=data.get("revision"),
        )

    @property
    def is_private(self) -> bool:
        return self.bucket_type == BucketType.ALL_PRIVATE
