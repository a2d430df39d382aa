from fastapi import APIRouter, Depends, Request
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from imagehost.api.deps import get_upload_service
from imagehost.core.errors import MalformedRequestError, MissingFileError, TooManyFilesError
from imagehost.schemas import ErrorResponse, UploadResponse
from imagehost.services.upload import UploadRequest, UploadService

router = APIRouter(prefix="/api", tags=["upload"])

FILE_FIELD = "file"


async def _read_upload(form: FormData) -> UploadRequest:
    parts = form.getlist(FILE_FIELD)
    if not parts:
        raise MissingFileError()
    if len(parts) > 1:
        raise TooManyFilesError()

    part = parts[0]
    if not isinstance(part, UploadFile):
        raise MissingFileError()

    data = await part.read()
    if not part.filename and not data:
        raise MissingFileError()
    return UploadRequest(
        data=data,
        content_type=part.content_type or "",
        filename=part.filename or "",
    )


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_image(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException):
        raise MalformedRequestError() from None

    try:
        upload = await _read_upload(form)
    finally:
        await form.close()

    result = await service.handle(upload)
    return UploadResponse(url=result.url)
