"""
Custom exception classes for the toolkit.

Reference-data lookups and inserts do not define their own errors; whatever
the store raises reaches the caller unchanged. Media ingestion failures are
reported through the MediaHelperError family below.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all toolkit errors.

    Attributes:
        code: Error code (e.g., "MEDIA_UPLOAD_FAILED")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


# ===================
# MEDIA ERRORS
# ===================

class MediaHelperError(AppError):
    """Media ingestion failed. Aborts the whole assign_media call."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=status_code,
            details=details
        )


class MediaUploadError(MediaHelperError):
    """Remote image could not be fetched (network error, bad status, empty body)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(
            code="MEDIA_UPLOAD_FAILED",
            message=f'Failed to upload media from URL "{url}": {reason}',
            status_code=502,
            details={"url": url, "reason": reason}
        )


class MediaBase64DecodeError(MediaHelperError):
    """Inline base64 data failed strict decoding or decoded to nothing."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            code="MEDIA_BASE64_DECODE_FAILED",
            message=f"Failed to decode base64 image: {reason}",
            status_code=422,
            details={"reason": reason}
        )


class MediaContentSaveError(MediaHelperError):
    """Media bytes could not be stored (temp file, MIME type, store or storage)."""

    def __init__(self, reason: str, details: Optional[dict] = None):
        self.reason = reason
        super().__init__(
            code="MEDIA_CONTENT_SAVE_FAILED",
            message=f"Failed to save media content: {reason}",
            status_code=500,
            details={"reason": reason, **(details or {})}
        )


class UnsupportedMediaTypeError(MediaContentSaveError):
    """Sniffed MIME type has no entry in the extension table."""

    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(
            reason=f"Unsupported file type: {mime_type}",
            details={"mime_type": mime_type}
        )
