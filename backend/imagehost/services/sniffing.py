import io
import logging

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def declared_media_type(content_type: str | None) -> str:
    """Normalise a Content-Type header value to ``type/subtype``."""
    return (content_type or "").split(";", 1)[0].strip().lower()


def is_image_media_type(content_type: str | None) -> bool:
    media_type = declared_media_type(content_type)
    major, _, subtype = media_type.partition("/")
    return major == "image" and bool(subtype)


def sniff_image_format(data: bytes) -> str | None:
    """Return the image MIME type detected from ``data``, or None.

    Pillow reads only the header and structure; pixel data is not decoded.
    """
    if not data:
        return None
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
        logger.debug("Content is not a recognised image: %s", exc)
        return None
    except (OSError, SyntaxError, ValueError) as exc:
        logger.debug("Image structure check failed: %s", exc)
        return None
    if not image_format:
        return None
    return Image.MIME.get(image_format, f"image/{image_format.lower()}")
