"""Short-form videos are uploaded files (always free); long-form videos point to an external URL."""
import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from shortreel.database import Base


class VideoType(str, enum.Enum):
    SHORT_FORM = "short-form"
    LONG_FORM = "long-form"


class Video(Base):
    __tablename__ = "videos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)
    price = Column(Integer, nullable=False, default=0)
    video_url = Column(String(2048), nullable=True)  # long-form only
    video_file = Column(String(512), nullable=True)  # filename under upload dir, short-form only
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    creator = relationship("User")
