"""IGDB image URL helpers - convert CDN image URLs between sizes."""

import re
from typing import Optional

IGDB_IMAGE_HOST = "images.igdb.com"
IGDB_IMAGE_BASE = f"https://{IGDB_IMAGE_HOST}/igdb/image/upload"

# Size token -> approximate dimensions
IMAGE_SIZES = {
    "thumb": "90x128",
    "cover_small": "90x128",
    "cover_big": "264x374",
    "logo_med": "284x160",
    "screenshot_med": "569x320",
    "screenshot_big": "889x500",
    "screenshot_huge": "1280x720",
    "720p": "1280x720",
    "1080p": "1920x1080",
}

# URL format: https://images.igdb.com/igdb/image/upload/t_XXXX/image_id.jpg
_SIZE_TOKEN = re.compile(r"/t_[^/]+/")


def _check_size(size: str) -> None:
    if size not in IMAGE_SIZES:
        raise ValueError(f"Unknown IGDB image size: {size}")


def get_igdb_image_url(url: Optional[str], size: str) -> Optional[str]:
    """Swap the size token of an IGDB image URL. Other URLs pass through untouched."""
    _check_size(size)
    if not url:
        return url

    if IGDB_IMAGE_HOST not in url:
        return url

    return _SIZE_TOKEN.sub(f"/t_{size}/", url, count=1)


def get_high_res_cover_url(url: Optional[str]) -> Optional[str]:
    """720p cover for detail pages."""
    return get_igdb_image_url(url, "720p")


def get_high_res_screenshot_url(url: Optional[str]) -> Optional[str]:
    """1080p screenshot."""
    return get_igdb_image_url(url, "1080p")


def get_standard_cover_url(url: Optional[str]) -> Optional[str]:
    """Default cover size for list and grid views."""
    return get_igdb_image_url(url, "cover_big")


def build_image_url(image_ref: str, size: str) -> str:
    """Build a CDN URL from an image id or an IGDB asset URL.

    IGDB returns asset URLs like ``//images.igdb.com/.../t_thumb/abc.jpg``;
    only the filename is kept. ``.jpg`` is added when there is no extension.
    """
    _check_size(size)
    filename = image_ref.rsplit("/", 1)[-1]
    if "." not in filename:
        filename = f"{filename}.jpg"
    return f"{IGDB_IMAGE_BASE}/t_{size}/{filename}"
