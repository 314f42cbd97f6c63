import pytest

from shortreel.models.video import VideoType
from shortreel.repositories import user_repository, video_repository


def _seed_videos(db, creator_id: int, count: int):
    for i in range(1, count + 1):
        video_repository.create(
            db,
            title=f"video {i}",
            description="desc",
            video_type=VideoType.LONG_FORM,
            price=10,
            video_url=f"https://cdn.example.com/{i}.mp4",
            creator_id=creator_id,
        )


@pytest.mark.asyncio
async def test_short_form_upload_is_free_and_has_no_url(client, register_user):
    headers, user = await register_user("creator")
    resp = await client.post(
        "/api/videos",
        headers=headers,
        data={
            "title": "Clip",
            "description": "a short one",
            "type": "short-form",
            "price": "250",
            "videoUrl": "https://example.com/ignored.mp4",
        },
        files={"videoFile": ("clip.mp4", b"fake-video-bytes", "video/mp4")},
    )
    assert resp.status_code == 200, resp.text
    video = resp.json()["video"]
    assert video["price"] == 0
    assert video["videoUrl"] is None
    assert video["videoFile"].endswith(".mp4")
    assert video["creatorId"] == user["id"]
    assert video["type"] == "short-form"

    served = await client.get(f"/api/videos/file/{video['videoFile']}")
    assert served.status_code == 200
    assert served.content == b"fake-video-bytes"


@pytest.mark.asyncio
async def test_long_form_upload_keeps_price_and_url(client, register_user):
    headers, _ = await register_user("creator")
    resp = await client.post(
        "/api/videos/upload",
        headers=headers,
        data={
            "title": "Documentary",
            "description": "long",
            "type": "long-form",
            "price": "100",
            "videoUrl": "https://example.com/doc.mp4",
        },
    )
    assert resp.status_code == 200, resp.text
    video = resp.json()["video"]
    assert video["price"] == 100
    assert video["videoUrl"] == "https://example.com/doc.mp4"
    assert video["videoFile"] is None


@pytest.mark.asyncio
async def test_long_form_unparseable_price_is_free(client, register_user):
    headers, _ = await register_user("creator")
    resp = await client.post(
        "/api/videos",
        headers=headers,
        data={"title": "t", "description": "d", "type": "long-form", "price": "abc", "videoUrl": "https://x/y"},
    )
    assert resp.status_code == 200
    assert resp.json()["video"]["price"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data, error",
    [
        ({"description": "d", "type": "long-form", "videoUrl": "https://x/y"}, "Title, description, and type are required"),
        ({"title": "t", "type": "long-form", "videoUrl": "https://x/y"}, "Title, description, and type are required"),
        ({"title": "t", "description": "d", "videoUrl": "https://x/y"}, "Title, description, and type are required"),
        ({"title": "t", "description": "d", "type": "short-form"}, "Video file is required for short-form videos"),
        ({"title": "t", "description": "d", "type": "long-form"}, "Video URL is required for long-form videos"),
        ({"title": "t", "description": "d", "type": "mid-form", "videoUrl": "https://x/y"}, "Type must be short-form or long-form"),
        ({"title": "t", "description": "d", "type": "long-form", "videoUrl": "https://x/y", "price": "-5"}, "Price must not be negative"),
    ],
)
async def test_upload_validation(client, register_user, data, error):
    headers, _ = await register_user("creator")
    resp = await client.post("/api/videos", headers=headers, data=data)
    assert resp.status_code == 400
    assert resp.json() == {"error": error}


@pytest.mark.asyncio
async def test_upload_requires_auth(client):
    resp = await client.post(
        "/api/videos",
        data={"title": "t", "description": "d", "type": "long-form", "videoUrl": "https://x/y"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_failed_insert_removes_written_file(client, register_user, monkeypatch, tmp_path):
    headers, _ = await register_user("creator")

    def broken_create(*args, **kwargs):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(video_repository, "create", broken_create)
    with pytest.raises(RuntimeError):
        await client.post(
            "/api/videos",
            headers=headers,
            data={"title": "t", "description": "d", "type": "short-form"},
            files={"videoFile": ("clip.mp4", b"bytes", "video/mp4")},
        )
    upload_dir = tmp_path / "uploads"
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_feed_pagination_with_15_videos(client, db, register_user):
    headers, user = await register_user("viewer")
    _seed_videos(db, user["id"], 15)

    first = await client.get("/api/videos", headers=headers)
    assert first.status_code == 200
    data = first.json()
    assert [v["title"] for v in data["videos"]] == [f"video {i}" for i in range(15, 5, -1)]
    assert data["hasMore"] is True

    second = await client.get("/api/videos?page=2", headers=headers)
    data = second.json()
    assert [v["title"] for v in data["videos"]] == [f"video {i}" for i in range(5, 0, -1)]
    assert data["hasMore"] is False


@pytest.mark.asyncio
async def test_feed_pagination_with_25_videos(client, db, register_user):
    headers, user = await register_user("viewer")
    _seed_videos(db, user["id"], 25)

    second = await client.get("/api/videos", params={"page": 2}, headers=headers)
    data = second.json()
    assert len(data["videos"]) == 10
    assert data["hasMore"] is True

    third = await client.get("/api/videos", params={"page": 3}, headers=headers)
    assert len(third.json()["videos"]) == 5
    assert third.json()["hasMore"] is False


@pytest.mark.asyncio
async def test_feed_rejects_page_zero(client, register_user):
    headers, _ = await register_user("viewer")
    resp = await client.get("/api/videos?page=0", headers=headers)
    assert resp.status_code == 400
    assert "error" in resp.json()


@pytest.mark.asyncio
async def test_feed_joins_creator_and_purchase_status(client, db, register_user):
    headers, viewer = await register_user("viewer")
    creator = user_repository.register(db, "maker", "maker@example.com", "hash")
    video_repository.create(
        db, title="paid", description="d", video_type=VideoType.LONG_FORM,
        price=100, video_url="https://x/paid", creator_id=creator.id,
    )
    video_repository.create(
        db, title="free", description="d", video_type=VideoType.LONG_FORM,
        price=0, video_url="https://x/free", creator_id=creator.id,
    )

    videos = (await client.get("/api/videos", headers=headers)).json()["videos"]
    by_title = {v["title"]: v for v in videos}
    assert by_title["paid"]["creator"] == {"id": creator.id, "username": "maker"}
    assert by_title["paid"]["isPurchased"] is False
    assert by_title["free"]["isPurchased"] is True


@pytest.mark.asyncio
async def test_get_video_detail_and_not_found(client, db, register_user):
    headers, user = await register_user("viewer")
    _seed_videos(db, user["id"], 1)

    found = await client.get("/api/videos/1", headers=headers)
    assert found.status_code == 200
    video = found.json()["video"]
    assert video["id"] == 1
    assert video["creator"]["username"] == "viewer"
    assert video["isPurchased"] is False

    missing = await client.get("/api/videos/999", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Video not found"}


@pytest.mark.asyncio
async def test_feed_requires_auth(client):
    resp = await client.get("/api/videos")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized"}
