from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shortreel.auth import get_token_payload
from shortreel.database import get_db
from shortreel.models.comment import Comment
from shortreel.repositories import comment_repository
from shortreel.schemas.comment import (
    CommentAuthor,
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
    CommentResponse,
)
from shortreel.schemas.user import TokenPayload

router = APIRouter(prefix="/api/videos", tags=["comments"])


def _comment_view(comment: Comment) -> CommentResponse:
    # user may be missing; username is then null
    user = comment.user
    return CommentResponse(
        id=comment.id,
        video_id=comment.video_id,
        user_id=comment.user_id,
        text=comment.text,
        created_at=comment.created_at,
        user=CommentAuthor(username=user.username if user else None),
    )


@router.get("/{video_id}/comments", response_model=CommentListResponse)
def list_comments(
    video_id: int,
    _payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    """Comments on a video, newest first."""
    rows = comment_repository.list_comments(db, video_id)
    return CommentListResponse(comments=[_comment_view(c) for c in rows])


@router.post("/{video_id}/comments", response_model=CommentCreatedResponse)
def add_comment(
    video_id: int,
    body: CommentCreate,
    payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    comment = comment_repository.add_comment(db, video_id, payload.user_id, body.text)
    return CommentCreatedResponse(message="Comment added successfully", comment=_comment_view(comment))
