from fastapi import status


class UploadError(Exception):
    """Base class for failures rendered to the client as ``{"error": ...}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Upload failed, please try again"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingFileError(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "No file provided"


class TooManyFilesError(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Only one file may be uploaded per request"


class InvalidTypeError(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Only image files are allowed"


class MalformedRequestError(UploadError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Malformed upload request"


class UploadFailedError(UploadError):
    """Generic failure; the underlying cause is logged, never returned."""


class StoreWriteError(Exception):
    """Raised when the object store rejects or cannot complete a write."""


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing or invalid."""
