"""
Media ingestion schemas.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic import Field

from models.base import BaseSchema, TimestampMixin


class SourceKind(str, Enum):
    """How an image source string is turned into bytes."""
    URL = "URL"
    BASE64 = "BASE64"


@dataclass(frozen=True)
class ImageSource:
    """
    Classified image source.

    For BASE64 sources, data holds the payload with any data URI prefix
    removed. For URL sources, data is the URL itself.
    """

    kind: SourceKind
    data: str
    raw: str

    @property
    def is_base64(self) -> bool:
        return self.kind == SourceKind.BASE64


@dataclass
class MediaFile:
    """Temporary file handed to the storage subsystem."""

    path: Path
    mime_type: str
    extension: str
    file_size: int


class MediaReference(BaseSchema):
    """Opaque reference to an ingested media record."""

    media_id: str = Field(..., description="Media UUID")

    def to_payload(self) -> dict[str, str]:
        """Reference shape expected by records that point at media."""
        return {"media_id": self.media_id}


class MediaCreate(BaseSchema):
    """Media metadata row inserted before the bytes are uploaded."""

    id: str
    name: str
    file_extension: str
    mime_type: str
    media_folder_id: Optional[str] = None


class MediaFolderResponse(BaseSchema, TimestampMixin):
    """Media folder row."""

    id: str
    name: str
    configuration: Optional[dict] = None


class ThumbnailSizeResponse(BaseSchema):
    """Media thumbnail size row."""

    id: str
    width: int
    height: int
