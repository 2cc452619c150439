"""Page controllers for the browser client."""
from .auth import submit_login, submit_logout, submit_register
from .base import PageState, PageStatus, gate, load_protected
from .home import VideoListPage, load_explore, load_feed
from .profile import ProfilePage, load_profile
from .upload import UploadForm, submit_upload
from .video import VideoDetailPage, load_video_detail

__all__ = [
    "PageState",
    "PageStatus",
    "gate",
    "load_protected",
    "submit_login",
    "submit_logout",
    "submit_register",
    "VideoListPage",
    "load_explore",
    "load_feed",
    "ProfilePage",
    "load_profile",
    "UploadForm",
    "submit_upload",
    "VideoDetailPage",
    "load_video_detail",
]
