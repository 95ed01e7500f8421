from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

VIDEO_CREATED_MESSAGE = "Object created. Please upload the file for this Video."
VIDEO_ID_REQUIRED_MESSAGE = "video_id is required"
UPLOAD_FIELD_MESSAGE = "Please upload file with 'upload' form field key."
UPLOAD_FAILED_MESSAGE = "File upload is having issues right now. Please try later."
TRANSCODING_MESSAGE = "Video file uploaded. Transcoding now: {video_id}"


# 資料模型
class VideoCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    duration_str: Optional[str] = None


class VideoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    url: Optional[str] = None
    duration_str: Optional[str] = None
    created_at: Optional[datetime] = None


class VideoListResponse(BaseModel):
    count: int
    results: List[VideoOut]


class VideoDetailResponse(BaseModel):
    data: VideoOut


class VideoCreatedResponse(BaseModel):
    title: str
    message: str = VIDEO_CREATED_MESSAGE


class UploadAcceptedResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
