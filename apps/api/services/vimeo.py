"""
Vimeo URL helpers.

Workouts store whatever the admin pasted (share URL, player URL or bare ID);
the player and thumbnails need the numeric video ID.
"""
import re
from typing import Optional

from core.config import settings

_VIMEO_ID_PATTERNS = (
    re.compile(r"player\.vimeo\.com/video/(\d+)"),
    re.compile(r"vimeo\.com/(?:video/|channels/[\w-]+/|groups/[\w-]+/videos/)?(\d+)"),
    re.compile(r"^(\d+)$"),
)


def extract_vimeo_id(url: str) -> str:
    """
    Pull the numeric video ID out of a Vimeo URL.

    Returns the input unchanged when nothing matches, so a caller can store
    an unrecognised value and fix it later.
    """
    value = (url or "").strip()
    for pattern in _VIMEO_ID_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return value


def thumbnail_url(vimeo_id: str) -> str:
    return f"{settings.VIMEO_THUMBNAIL_BASE_URL.rstrip('/')}/{vimeo_id}.jpg"


def embed_url(vimeo_id: Optional[str]) -> Optional[str]:
    if not vimeo_id:
        return None
    return f"{settings.VIMEO_PLAYER_BASE_URL.rstrip('/')}/{vimeo_id}"
