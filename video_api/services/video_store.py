import logging
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from video_api.models import Video
from video_api.schemas import VideoCreate

logger = logging.getLogger(__name__)


class VideoStoreError(Exception):
    """Any failure while reading or writing video records."""


class VideoNotFoundError(VideoStoreError):
    def __init__(self, video_id: int):
        super().__init__(f"video {video_id} not found")
        self.video_id = video_id


def get_video_objects(db: Session) -> Tuple[int, List[Video]]:
    """Return the number of videos and every video ordered by id."""
    try:
        videos = list(db.scalars(select(Video).order_by(Video.id)))
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to list videos: {e}")
        raise VideoStoreError(str(e)) from e
    # count taken from the same result set so the two always agree
    return len(videos), videos


def get_video_object(db: Session, video_id: int) -> Video:
    try:
        video = db.get(Video, video_id)
    except SQLAlchemyError as e:
        logger.error(f"❌ Failed to load video {video_id}: {e}")
        raise VideoStoreError(str(e)) from e
    if video is None:
        raise VideoNotFoundError(video_id)
    return video


def create_video_object(db: Session, payload: VideoCreate) -> Video:
    """Insert a new video record and return it with its id assigned."""
    video = Video(**payload.model_dump())
    try:
        db.add(video)
        db.commit()
        db.refresh(video)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Failed to create video {payload.title!r}: {e}")
        raise VideoStoreError(str(e)) from e
    logger.info(f"✅ Created video {video.id}: {video.title}")
    return video
