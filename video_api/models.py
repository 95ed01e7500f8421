from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, func

from .db import Base


class Video(Base):
    __tablename__ = "videos"
    id = Column(Integer, primary_key=True)
    title = Column(Text, nullable=False)
    description = Column(Text)
    url = Column(Text)
    duration_str = Column(String(20))
    created_at = Column(TIMESTAMP, server_default=func.now())

    def __repr__(self):
        return f"<Video id={self.id} title={self.title!r}>"
