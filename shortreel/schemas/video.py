from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class VideoResponse(CamelModel):
    id: int
    title: str
    description: str
    type: str
    price: int
    video_url: str | None
    video_file: str | None
    creator_id: int
    created_at: datetime


class CreatorSummary(CamelModel):
    id: int | None = None
    username: str | None = None


class VideoDetailResponse(VideoResponse):
    """Video joined with its creator and the viewer's purchase status."""
    creator: CreatorSummary
    is_purchased: bool


class VideoUploadResponse(CamelModel):
    message: str
    video: VideoResponse


class VideoEnvelope(CamelModel):
    video: VideoDetailResponse


class VideoListResponse(CamelModel):
    videos: list[VideoDetailResponse]
    has_more: bool
