from fastapi import Request

from imagehost.services.upload import UploadService


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
