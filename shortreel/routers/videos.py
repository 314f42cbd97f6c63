"""
Feed, upload and file delivery.
Short-form videos are stored files served from /file/{filename}; long-form videos only keep a URL.
"""
import logging
import re
from pathlib import Path
from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import Response, StreamingResponse
from sqlalchemy.orm import Session
from shortreel.auth import get_token_payload
from shortreel.config import get_settings
from shortreel.database import get_db
from shortreel.exceptions import NotFoundError, ValidationError
from shortreel.models.video import Video, VideoType
from shortreel.repositories import video_repository
from shortreel.schemas.user import TokenPayload
from shortreel.schemas.video import (
    CreatorSummary,
    VideoDetailResponse,
    VideoEnvelope,
    VideoListResponse,
    VideoResponse,
    VideoUploadResponse,
)
from shortreel.services.video_upload import (
    CHUNK_SIZE,
    VIDEO_MEDIA_TYPE,
    discard_video_file,
    resolve_upload_path,
    save_video_file,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/videos", tags=["videos"])


def _video_view(video: Video, purchased: bool) -> VideoDetailResponse:
    """Join a video with its creator and the viewer's unlock status."""
    creator = video.creator
    return VideoDetailResponse(
        **VideoResponse.model_validate(video).model_dump(),
        creator=CreatorSummary(
            id=creator.id if creator else None,
            username=creator.username if creator else None,
        ),
        is_purchased=video_repository.is_viewable(video, purchased),
    )


def _parse_price(raw: str | None) -> int:
    """Leading integer of the form value; anything unparseable counts as free."""
    m = re.match(r"\s*([+-]?\d+)", raw or "")
    if not m:
        return 0
    price = int(m.group(1))
    if price < 0:
        raise ValidationError("Price must not be negative")
    return price


def _stream_file_range(path: Path, request: Request, content_type: str):
    """Handle Range request for video streaming. Returns Response with 206 or 200."""
    file_size = path.stat().st_size
    range_header = request.headers.get("range")
    if not range_header:
        def full_stream():
            with open(path, "rb") as f:
                while chunk := f.read(CHUNK_SIZE):
                    yield chunk

        return StreamingResponse(
            full_stream(),
            status_code=200,
            media_type=content_type,
            headers={
                "Accept-Ranges": "bytes",
                "Content-Length": str(file_size),
            },
        )

    # Parse Range: bytes=start-end | bytes=start- | bytes=-suffix (single range only; multi-range is 416)
    m = re.fullmatch(r"bytes=(\d*)-(\d*)", range_header.strip())
    if not m or m.groups() == ("", ""):
        return Response(status_code=416, headers={"Content-Range": f"bytes */{file_size}"})
    start_s, end_s = m.groups()
    if not start_s:
        suffix = int(end_s)
        if suffix == 0:
            return Response(status_code=416, headers={"Content-Range": f"bytes */{file_size}"})
        start = max(file_size - suffix, 0)
        end = file_size - 1
    else:
        start = int(start_s)
        end = int(end_s) if end_s else file_size - 1
    if start > end or start >= file_size:
        return Response(status_code=416, headers={"Content-Range": f"bytes */{file_size}"})
    end = min(end, file_size - 1)
    length = end - start + 1

    def range_stream():
        with open(path, "rb") as f:
            f.seek(start)
            remaining = length
            while remaining > 0:
                data = f.read(min(CHUNK_SIZE, remaining))
                if not data:
                    break
                remaining -= len(data)
                yield data

    return StreamingResponse(
        range_stream(),
        status_code=206,
        media_type=content_type,
        headers={
            "Accept-Ranges": "bytes",
            "Content-Range": f"bytes {start}-{end}/{file_size}",
            "Content-Length": str(length),
        },
    )


# ---------- Feed ----------


@router.get("", response_model=VideoListResponse)
def list_videos(
    page: int = Query(1, ge=1),
    payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    """Paginated feed, newest first."""
    videos, has_more = video_repository.list_page(db, page, get_settings().feed_page_size)
    purchased = video_repository.purchased_video_ids(db, payload.user_id, [v.id for v in videos])
    return VideoListResponse(
        videos=[_video_view(v, v.id in purchased) for v in videos],
        has_more=has_more,
    )


# ---------- Upload ----------


@router.post("", response_model=VideoUploadResponse)
@router.post("/upload", response_model=VideoUploadResponse, include_in_schema=False)
def upload_video(
    title: str | None = Form(None),
    description: str | None = Form(None),
    type_: str | None = Form(None, alias="type"),
    price: str | None = Form(None),
    video_url: str | None = Form(None, alias="videoUrl"),
    video_file: UploadFile | None = File(None, alias="videoFile"),
    payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    """
    Create a video. short-form needs videoFile and is always free;
    long-form needs videoUrl and may carry a price.
    The file is written before the record is inserted, and removed again if the insert fails.
    """
    if not title or not description or not type_:
        raise ValidationError("Title, description, and type are required")
    try:
        video_type = VideoType(type_)
    except ValueError:
        raise ValidationError("Type must be short-form or long-form")

    has_file = video_file is not None and bool(video_file.filename)
    if video_type == VideoType.SHORT_FORM and not has_file:
        raise ValidationError("Video file is required for short-form videos")
    if video_type == VideoType.LONG_FORM and not video_url:
        raise ValidationError("Video URL is required for long-form videos")

    price_value = _parse_price(price) if video_type == VideoType.LONG_FORM else 0

    saved_name = None
    if video_type == VideoType.SHORT_FORM:
        saved_name = save_video_file(video_file)

    try:
        video = video_repository.create(
            db,
            title=title,
            description=description,
            video_type=video_type,
            price=price_value,
            video_url=video_url,
            video_file=saved_name,
            creator_id=payload.user_id,
        )
    except Exception:
        if saved_name:
            discard_video_file(saved_name)
        raise

    logger.info("User %s uploaded %s video %s", payload.user_id, video.type, video.id)
    return VideoUploadResponse(
        message="Video uploaded successfully",
        video=VideoResponse.model_validate(video),
    )


# ---------- File delivery (public; must be before /{video_id}) ----------


@router.get("/file/{filename}")
def get_video_file(filename: str, request: Request):
    """Stream an uploaded short-form file. Always served as video/mp4; supports Range."""
    path = resolve_upload_path(filename)
    if not path:
        raise NotFoundError("File not found")
    return _stream_file_range(path, request, VIDEO_MEDIA_TYPE)


# ---------- Detail ----------


@router.get("/{video_id}", response_model=VideoEnvelope)
def get_video(
    video_id: int,
    payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    video = video_repository.get_by_id(db, video_id)
    purchased = video_repository.has_purchased(db, payload.user_id, video_id)
    return VideoEnvelope(video=_video_view(video, purchased))
