"""Short-form upload storage: write files under the upload dir and resolve them back safely."""
import logging
import uuid
from pathlib import Path
from fastapi import UploadFile
from shortreel.config import get_settings

logger = logging.getLogger(__name__)

VIDEO_MEDIA_TYPE = "video/mp4"
CHUNK_SIZE = 1024 * 1024  # 1 MB


def video_upload_dir() -> Path:
    settings = get_settings()
    if settings.video_upload_dir:
        return Path(settings.video_upload_dir)
    return Path(__file__).resolve().parent.parent.parent / "uploads" / "videos"


def save_video_file(file: UploadFile) -> str:
    """Write the upload to disk under a generated name and return that name (the storage token)."""
    upload_dir = video_upload_dir()
    upload_dir.mkdir(parents=True, exist_ok=True)
    ext = Path(file.filename or "video").suffix or ".mp4"
    if len(ext) > 10:
        ext = ".mp4"
    path = upload_dir / f"{uuid.uuid4()}{ext}"
    try:
        with path.open("wb") as f:
            while chunk := file.file.read(CHUNK_SIZE):
                f.write(chunk)
    except OSError:
        logger.exception("Failed to write upload %s", path)
        path.unlink(missing_ok=True)
        raise
    return path.name


def discard_video_file(filename: str) -> None:
    """Remove a stored file whose catalog record could not be created."""
    path = resolve_upload_path(filename)
    if path:
        path.unlink(missing_ok=True)


def resolve_upload_path(filename: str) -> Path | None:
    """Resolve filename under the upload dir. Return None if invalid (path traversal) or missing."""
    base = video_upload_dir().resolve()
    if not filename or not base.is_dir():
        return None
    try:
        full = (base / filename).resolve()
        full.relative_to(base)  # raises ValueError if path escaped
    except (ValueError, OSError):
        return None
    if full == base or not full.is_file():
        return None
    return full
