import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from imagehost.api.routers import upload as upload_router
from imagehost.core.config import Settings, get_settings
from imagehost.core.errors import UploadError, UploadFailedError
from imagehost.core.logging import configure_logging
from imagehost.services.storage import ObjectStore, S3ObjectStore, StorageConfig
from imagehost.services.upload import UploadService

logger = logging.getLogger(__name__)


def _error_response(error: UploadError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    return _error_response(exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(UploadFailedError())


def create_app(settings: Settings | None = None, store: ObjectStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if store is None:
        storage_config = StorageConfig.from_settings(settings)
        store = S3ObjectStore(storage_config)
        logger.info("Using object store %r", storage_config)

    app = FastAPI(title="Image Upload API")
    app.state.settings = settings
    app.state.upload_service = UploadService(store, sniff_content=settings.sniff_content)

    app.add_exception_handler(UploadError, upload_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(upload_router.router)

    return app


app = create_app()
