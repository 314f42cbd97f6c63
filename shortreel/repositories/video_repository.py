"""Catalog store: videos and purchase records."""
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from shortreel.exceptions import NotFoundError
from shortreel.models.purchase import Purchase
from shortreel.models.video import Video, VideoType


def create(
    db: Session,
    *,
    title: str,
    description: str,
    video_type: VideoType,
    creator_id: int,
    price: int = 0,
    video_url: str | None = None,
    video_file: str | None = None,
) -> Video:
    """Insert a video. Short-form is always free and never carries a URL. Commits."""
    if video_type == VideoType.SHORT_FORM:
        price = 0
        video_url = None
    else:
        video_file = None
    video = Video(
        title=title,
        description=description,
        type=video_type.value,
        price=price,
        video_url=video_url,
        video_file=video_file,
        creator_id=creator_id,
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


def list_page(db: Session, page: int, page_size: int = 10) -> tuple[list[Video], bool]:
    """Newest first (ties: newest id first). Returns (videos, has_more)."""
    offset = (page - 1) * page_size
    total = db.query(func.count(Video.id)).scalar()
    rows = (
        db.query(Video)
        .order_by(desc(Video.created_at), desc(Video.id))
        .offset(offset)
        .limit(page_size)
        .all()
    )
    return rows, total > offset + page_size


def get_by_id(db: Session, video_id: int) -> Video:
    video = db.query(Video).filter(Video.id == video_id).first()
    if not video:
        raise NotFoundError("Video not found")
    return video


def has_purchased(db: Session, user_id: int, video_id: int) -> bool:
    return (
        db.query(Purchase.id)
        .filter(Purchase.user_id == user_id, Purchase.video_id == video_id)
        .first()
        is not None
    )


def purchased_video_ids(db: Session, user_id: int, video_ids: list[int]) -> set[int]:
    if not video_ids:
        return set()
    rows = (
        db.query(Purchase.video_id)
        .filter(Purchase.user_id == user_id, Purchase.video_id.in_(video_ids))
        .all()
    )
    return {r[0] for r in rows}


def add_purchase(db: Session, user_id: int, video_id: int, amount: int) -> Purchase:
    """Stage a purchase row. Caller commits (unique on user/video)."""
    purchase = Purchase(user_id=user_id, video_id=video_id, amount=amount)
    db.add(purchase)
    db.flush()
    return purchase


def is_viewable(video: Video, purchased: bool) -> bool:
    return purchased or video.price == 0
