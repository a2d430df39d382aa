from imagehost.schemas.upload import ErrorResponse, UploadResponse

__all__ = [
    "UploadResponse",
    "ErrorResponse",
]
