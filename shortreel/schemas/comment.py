from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CommentCreate(BaseModel):
    text: str | None = None


class CommentAuthor(BaseModel):
    username: str | None = None


class CommentResponse(BaseModel):
    id: int
    video_id: int
    user_id: int
    text: str
    created_at: datetime
    user: CommentAuthor

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CommentCreatedResponse(BaseModel):
    message: str
    comment: CommentResponse


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
