import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from video_api.config import Settings
from video_api.db import get_db
from video_api.schemas import (
    ErrorResponse,
    UploadAcceptedResponse,
    VideoCreate,
    VideoCreatedResponse,
    VideoDetailResponse,
    VideoListResponse,
    VideoOut,
    TRANSCODING_MESSAGE,
    UPLOAD_FAILED_MESSAGE,
    UPLOAD_FIELD_MESSAGE,
    VIDEO_ID_REQUIRED_MESSAGE,
)
from video_api.services.upload_storage import (
    InvalidFilenameError,
    UploadStorageError,
    UploadTooLargeError,
    safe_filename,
    save_upload,
)
from video_api.services.video_store import (
    VideoStoreError,
    create_video_object,
    get_video_object,
    get_video_objects,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["videos"])

ERROR_RESPONSES = {400: {"model": ErrorResponse}}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def error_response(error, message=None) -> JSONResponse:
    content = {"error": str(error)}
    if message is not None:
        content["message"] = message
    return JSONResponse(status_code=400, content=content)


@router.get("/videos", response_model=VideoListResponse, responses=ERROR_RESPONSES)
def get_video_list(db: Session = Depends(get_db)):
    try:
        count, videos = get_video_objects(db)
    except VideoStoreError as e:
        return error_response(e)

    return VideoListResponse(
        count=count,
        results=[VideoOut.model_validate(v) for v in videos],
    )


@router.get("/videos/{video_id}", response_model=VideoDetailResponse, responses=ERROR_RESPONSES)
def get_video_detail(video_id: int, db: Session = Depends(get_db)):
    try:
        video = get_video_object(db, video_id)
    except VideoStoreError as e:
        logger.info(f"Video {video_id} lookup failed: {e}")
        return error_response(e)

    return VideoDetailResponse(data=VideoOut.model_validate(video))


@router.post("/videos", response_model=VideoCreatedResponse, responses=ERROR_RESPONSES)
def create_video(video: VideoCreate, db: Session = Depends(get_db)):
    try:
        created = create_video_object(db, video)
    except VideoStoreError as e:
        return error_response(e)

    return VideoCreatedResponse(title=created.title)


@router.post("/video-upload", response_model=UploadAcceptedResponse, responses=ERROR_RESPONSES)
async def upload_video_file(request: Request, settings: Settings = Depends(get_settings)):
    """
    Accept a multipart form with a ``video_id`` field and an ``upload`` file.

    The file is stored under the upload folder with the client's filename
    (directory parts removed). ``video_id`` is echoed back as is and is not
    checked against stored videos.
    """
    max_size = settings.MAX_UPLOAD_SIZE
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_size:
        return error_response(UploadTooLargeError(max_size), UPLOAD_FAILED_MESSAGE)

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        detail = getattr(e, "detail", None) or getattr(e, "message", None) or str(e)
        return error_response(f"invalid multipart form: {detail}", UPLOAD_FIELD_MESSAGE)

    try:
        video_id = form.get("video_id")
        if not isinstance(video_id, str) or not video_id:
            return error_response("missing form field 'video_id'", VIDEO_ID_REQUIRED_MESSAGE)

        upload = form.get("upload")
        if not isinstance(upload, UploadFile):
            return error_response("no file attached under form field 'upload'", UPLOAD_FIELD_MESSAGE)

        try:
            filename = safe_filename(upload.filename)
        except InvalidFilenameError as e:
            return error_response(e, UPLOAD_FIELD_MESSAGE)

        try:
            size = await save_upload(upload, settings.UPLOAD_FOLDER_PATH, filename, max_size)
        except UploadStorageError as e:
            return error_response(e, UPLOAD_FAILED_MESSAGE)
    finally:
        await form.close()

    logger.info(f"Video {video_id}: received {filename} ({size} bytes)")
    return UploadAcceptedResponse(message=TRANSCODING_MESSAGE.format(video_id=video_id))
