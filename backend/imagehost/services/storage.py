import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from imagehost.core.config import Settings
from imagehost.core.errors import StoreWriteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageConfig:
    """Connection parameters for an S3-compatible endpoint, fixed at startup."""

    endpoint_url: str
    bucket: str
    access_key: str
    secret_key: str
    region: str = "us-east-1"
    timeout_seconds: float = 10.0
    max_attempts: int = 1

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(
            endpoint_url=str(settings.s3_endpoint).rstrip("/"),
            bucket=settings.s3_bucket,
            access_key=settings.s3_access_key,
            secret_key=settings.s3_secret_key,
            region=settings.s3_region,
            timeout_seconds=settings.s3_timeout_seconds,
            max_attempts=settings.s3_max_attempts,
        )

    def __repr__(self) -> str:
        return (
            f"StorageConfig(endpoint_url={self.endpoint_url!r}, "
            f"bucket={self.bucket!r}, region={self.region!r})"
        )


def build_public_url(endpoint_url: str, bucket: str, key: str) -> str:
    return f"{endpoint_url.rstrip('/')}/{bucket}/{key}"


class ObjectStore(Protocol):
    bucket: str

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        """Write ``data`` under ``key``; raise StoreWriteError on any failure."""
        ...

    def public_url(self, key: str) -> str:
        ...


class S3ObjectStore:
    """S3-compatible storage backend using path-style addressing."""

    def __init__(self, config: StorageConfig) -> None:
        self.config = config
        self.bucket = config.bucket
        session = boto3.session.Session()
        self.client = session.client(
            "s3",
            endpoint_url=config.endpoint_url,
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                connect_timeout=config.timeout_seconds,
                read_timeout=config.timeout_seconds,
                retries={"mode": "standard", "total_max_attempts": config.max_attempts},
            ),
        )

    def _put_object(self, key: str, data: bytes, content_type: str) -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            raise StoreWriteError(f"PutObject rejected for {key}: {code}") from exc
        except BotoCoreError as exc:
            raise StoreWriteError(f"PutObject failed for {key}: {exc}") from exc

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        await asyncio.to_thread(self._put_object, key, data, content_type)
        logger.debug("PutObject acknowledged for %s/%s", self.bucket, key)

    def public_url(self, key: str) -> str:
        return build_public_url(self.config.endpoint_url, self.bucket, key)
