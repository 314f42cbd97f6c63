from shortreel.models.user import User
from shortreel.models.video import Video, VideoType
from shortreel.models.purchase import Purchase
from shortreel.models.gift import Gift
from shortreel.models.comment import Comment

__all__ = ["User", "Video", "VideoType", "Purchase", "Gift", "Comment"]
