import pytest

from shortreel.exceptions import NotFoundError, ValidationError
from shortreel.models.comment import Comment
from shortreel.models.video import VideoType
from shortreel.repositories import comment_repository, user_repository, video_repository


@pytest.fixture
def video(db):
    owner = user_repository.register(db, "owner", "owner@example.com", "hash")
    return video_repository.create(
        db,
        title="v",
        description="d",
        video_type=VideoType.LONG_FORM,
        video_url="https://x/v",
        creator_id=owner.id,
    )


def test_comments_are_listed_newest_first(db, video):
    for text in ("first", "second", "third"):
        comment_repository.add_comment(db, video.id, video.creator_id, text)

    texts = [c.text for c in comment_repository.list_comments(db, video.id)]
    assert texts == ["third", "second", "first"]


def test_comment_text_is_trimmed(db, video):
    comment = comment_repository.add_comment(db, video.id, video.creator_id, "  nice clip \n")
    assert comment.text == "nice clip"


@pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
def test_blank_comment_is_rejected_and_not_stored(db, video, text):
    with pytest.raises(ValidationError, match="Comment text is required"):
        comment_repository.add_comment(db, video.id, video.creator_id, text)
    assert db.query(Comment).count() == 0


def test_comments_on_unknown_video(db):
    with pytest.raises(NotFoundError):
        comment_repository.add_comment(db, 404, 1, "hello")
    with pytest.raises(NotFoundError):
        comment_repository.list_comments(db, 404)


@pytest.mark.asyncio
async def test_comment_endpoints_join_username(client, register_user):
    headers, user = await register_user("critic")
    upload = await client.post(
        "/api/videos",
        headers=headers,
        data={"title": "t", "description": "d", "type": "long-form", "videoUrl": "https://x/y"},
    )
    video_id = upload.json()["video"]["id"]

    posted = await client.post(f"/api/videos/{video_id}/comments", headers=headers, json={"text": " great "})
    assert posted.status_code == 200
    comment = posted.json()["comment"]
    assert comment["text"] == "great"
    assert comment["videoId"] == video_id
    assert comment["userId"] == user["id"]
    assert comment["user"] == {"username": "critic"}

    await client.post(f"/api/videos/{video_id}/comments", headers=headers, json={"text": "later"})

    listed = await client.get(f"/api/videos/{video_id}/comments", headers=headers)
    assert listed.status_code == 200
    assert [c["text"] for c in listed.json()["comments"]] == ["later", "great"]


@pytest.mark.asyncio
async def test_blank_comment_over_http(client, register_user):
    headers, _ = await register_user("critic")
    upload = await client.post(
        "/api/videos",
        headers=headers,
        data={"title": "t", "description": "d", "type": "long-form", "videoUrl": "https://x/y"},
    )
    video_id = upload.json()["video"]["id"]

    resp = await client.post(f"/api/videos/{video_id}/comments", headers=headers, json={"text": "   "})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Comment text is required"}

    listed = await client.get(f"/api/videos/{video_id}/comments", headers=headers)
    assert listed.json() == {"comments": []}


@pytest.mark.asyncio
async def test_comments_require_auth(client):
    resp = await client.get("/api/videos/1/comments")
    assert resp.status_code == 401
