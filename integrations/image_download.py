"""
Remote image download.

Fetches raw bytes for URL image sources.
"""

from typing import Optional
import requests
import structlog

from config import settings
from exceptions import MediaUploadError

logger = structlog.get_logger(__name__)


def download_image(url: str, timeout: Optional[float] = None) -> bytes:
    """
    Download an image and return its bytes.

    Args:
        url: HTTP(S) URL of the image
        timeout: Seconds to wait, defaults to settings.media_download_timeout

    Returns:
        Response body

    Raises:
        MediaUploadError: On network error, non-2xx status or empty body
    """
    if timeout is None:
        timeout = settings.media_download_timeout

    try:
        logger.debug("downloading_image", url=url)

        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

    except requests.exceptions.RequestException as e:
        logger.error("image_download_failed", url=url, error=str(e))
        raise MediaUploadError(url, str(e)) from e

    content = response.content
    if not content:
        logger.error("image_download_empty", url=url)
        raise MediaUploadError(url, "Failed to download image: empty response body")

    logger.debug("image_downloaded", url=url, size=len(content))
    return content
