from sqlalchemy import desc
from sqlalchemy.orm import Session

from shortreel.exceptions import NotFoundError, ValidationError
from shortreel.models.comment import Comment
from shortreel.models.video import Video


def _ensure_video(db: Session, video_id: int) -> None:
    if db.query(Video.id).filter(Video.id == video_id).first() is None:
        raise NotFoundError("Video not found")


def add_comment(db: Session, video_id: int, user_id: int, text: str | None) -> Comment:
    """Store a trimmed, non-empty comment. Commits."""
    text = (text or "").strip()
    if not text:
        raise ValidationError("Comment text is required")
    _ensure_video(db, video_id)
    comment = Comment(video_id=video_id, user_id=user_id, text=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def list_comments(db: Session, video_id: int) -> list[Comment]:
    """Newest first."""
    _ensure_video(db, video_id)
    return (
        db.query(Comment)
        .filter(Comment.video_id == video_id)
        .order_by(desc(Comment.created_at), desc(Comment.id))
        .all()
    )
