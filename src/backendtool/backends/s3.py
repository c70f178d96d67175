"""S3-compatible object storage backend (AWS, OVH, MinIO, etc.).

URLs look like ``s3://bucket/prefix``. Credentials come from the URL user
info or the auth_username/auth_password options; a custom endpoint is set
with ``--s3-endpoint-url``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

from backendtool.backends.base import (
    BackendError,
    FileMissingError,
    FolderMissingError,
    StreamingBackend,
    local_target,
)
from backendtool.core.types import FileEntry

if TYPE_CHECKING:
    from backendtool.core.config import BackendConfig

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
MISSING_BUCKET_CODES = frozenset({"404", "NoSuchBucket"})
MISSING_KEY_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _error_code(error: Any) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3Backend(StreamingBackend):
    """Bucket (optionally narrowed to a prefix) used as a container."""

    description = "S3-compatible object storage (s3://bucket/prefix)"

    def __init__(self, config: BackendConfig) -> None:
        super().__init__(config)
        import boto3

        if not config.host:
            raise BackendError("s3 backend requires a bucket name")

        self._bucket = config.host
        self._prefix = f"{config.path}/" if config.path else ""
        self._region = config.options.get("s3-region") or DEFAULT_REGION
        self._client: Any = boto3.client(
            "s3",
            endpoint_url=config.options.get("s3-endpoint-url") or None,
            aws_access_key_id=config.username,
            aws_secret_access_key=config.password,
            region_name=self._region,
        )

    def _key(self, name: str) -> str:
        """Get the S3 key for a file name."""
        return f"{self._prefix}{name}"

    def close(self) -> None:
        self._client.close()

    def list_files(self) -> list[FileEntry]:
        from botocore.exceptions import ClientError

        entries = []
        paginator = self._client.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(
                Bucket=self._bucket, Prefix=self._prefix, Delimiter="/"
            ):
                for common in page.get("CommonPrefixes", []):
                    name = common["Prefix"][len(self._prefix):].rstrip("/")
                    entries.append(FileEntry(name=name, is_folder=True))
                for obj in page.get("Contents", []):
                    name = obj["Key"][len(self._prefix):]
                    if not name:
                        continue
                    entries.append(
                        FileEntry(
                            name=name,
                            size=obj["Size"],
                            last_modified=obj.get("LastModified"),
                        )
                    )
        except ClientError as e:
            if _error_code(e) in MISSING_BUCKET_CODES:
                raise FolderMissingError(f"Bucket not found: {self._bucket}") from e
            raise
        return entries

    def test(self) -> None:
        from botocore.exceptions import ClientError

        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError as e:
            if _error_code(e) in MISSING_BUCKET_CODES:
                raise FolderMissingError(f"Bucket not found: {self._bucket}") from e
            raise

    def create_folder(self) -> None:
        logger.debug(f"Creating bucket {self._bucket} in {self._region}")
        if self._region == DEFAULT_REGION:
            self._client.create_bucket(Bucket=self._bucket)
        else:
            self._client.create_bucket(
                Bucket=self._bucket,
                CreateBucketConfiguration={"LocationConstraint": self._region},
            )

    def get_file(self, name: str, path: Path | str) -> None:
        with local_target(path) as f:
            self.get_stream(name, f)

    def put_file(self, name: str, path: Path | str) -> None:
        with Path(path).open("rb") as f:
            self.put_stream(name, f)

    def get_stream(self, name: str, stream: IO[bytes]) -> None:
        from botocore.exceptions import ClientError

        try:
            self._client.download_fileobj(self._bucket, self._key(name), stream)
        except ClientError as e:
            if _error_code(e) in MISSING_KEY_CODES:
                raise FileMissingError(f"File not found: {name}") from e
            raise

    def put_stream(self, name: str, stream: IO[bytes]) -> None:
        self._client.upload_fileobj(stream, self._bucket, self._key(name))

    def delete_file(self, name: str) -> None:
        from botocore.exceptions import ClientError

        try:
            self._client.head_object(Bucket=self._bucket, Key=self._key(name))
        except ClientError as e:
            if _error_code(e) in MISSING_KEY_CODES:
                raise FileMissingError(f"File not found: {name}") from e
            raise
        self._client.delete_object(Bucket=self._bucket, Key=self._key(name))
