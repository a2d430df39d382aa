import logging
from dataclasses import dataclass

from imagehost.core.errors import InvalidTypeError, StoreWriteError, UploadFailedError
from imagehost.services.keys import generate_storage_key
from imagehost.services.sniffing import (
    declared_media_type,
    is_image_media_type,
    sniff_image_format,
)
from imagehost.services.storage import ObjectStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadRequest:
    data: bytes
    content_type: str
    filename: str


@dataclass(frozen=True)
class UploadResult:
    key: str
    url: str
    content_type: str
    size: int


class UploadService:
    """Validates a single image upload, stores it, and returns its public URL.

    The store is injected so that any ``ObjectStore`` implementation can stand
    in for S3. Nothing is written unless validation passes, and each accepted
    upload results in exactly one ``put``.
    """

    def __init__(self, store: ObjectStore, *, sniff_content: bool = True) -> None:
        self.store = store
        self.sniff_content = sniff_content

    def validate(self, request: UploadRequest) -> None:
        if not is_image_media_type(request.content_type):
            logger.warning(
                "Rejected upload %r: declared type %r is not an image",
                request.filename,
                request.content_type,
            )
            raise InvalidTypeError()

        if not self.sniff_content:
            return

        detected = sniff_image_format(request.data)
        if detected is None:
            logger.warning(
                "Rejected upload %r: content is not a recognised image (%d bytes)",
                request.filename,
                len(request.data),
            )
            raise InvalidTypeError()

        declared = declared_media_type(request.content_type)
        if detected != declared:
            logger.info(
                "Upload %r declared as %s but content looks like %s; keeping declared type",
                request.filename,
                declared,
                detected,
            )

    async def handle(self, request: UploadRequest) -> UploadResult:
        self.validate(request)

        content_type = declared_media_type(request.content_type)
        try:
            key = generate_storage_key(request.filename)
            await self.store.put(key, request.data, content_type)
            url = self.store.public_url(key)
        except StoreWriteError:
            logger.exception("Object store write failed for upload %r", request.filename)
            raise UploadFailedError() from None
        except Exception:
            logger.exception("Unexpected failure storing upload %r", request.filename)
            raise UploadFailedError() from None

        logger.info(
            "Stored %s (%d bytes, %s) in bucket %s",
            key,
            len(request.data),
            content_type,
            self.store.bucket,
        )
        return UploadResult(key=key, url=url, content_type=content_type, size=len(request.data))
