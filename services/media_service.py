"""
Media service for turning image sources into platform media records.

Sources are HTTP(S) URLs or base64 data (optionally as a data URI). Each one
is materialized to a temporary file, sniffed for its MIME type, registered
as a media row and handed to the storage subsystem.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional
import base64
import binascii
import codecs
import os
import tempfile

import puremagic
import structlog

from config import settings, get_supabase_client
from config.media import (
    ASF_HEADER_GUID,
    ASF_VIDEO_MEDIA_GUID,
    DATA_URI_PATTERN,
    DEFAULT_MIME_TYPE,
    GLTF_BINARY_SIGNATURE,
    MEDIA_FOLDER_LEVEL,
    MIME_EXTENSION_MAP,
    MIME_TYPE_ALIASES,
    OGG_SIGNATURE,
    OGG_VIDEO_MARKERS,
    SNIFF_HEAD_SIZE,
    TEMP_FILE_PREFIX,
    TEXT_MIME_TYPE,
    TEXT_WHITESPACE,
    THUMBNAIL_QUALITY,
    THUMBNAIL_SIZES,
    UNKNOWN_MIME_TYPE,
    URL_SCHEMES,
)
from exceptions import (
    MediaBase64DecodeError,
    MediaContentSaveError,
    MediaHelperError,
    UnsupportedMediaTypeError,
)
from integrations.image_download import download_image
from integrations.media_storage import SupabaseMediaStorage
from models.media import (
    ImageSource,
    MediaCreate,
    MediaFile,
    MediaFolderResponse,
    MediaReference,
    SourceKind,
    ThumbnailSizeResponse,
)
from utils.ids import new_id

logger = structlog.get_logger(__name__)


# ===================
# SOURCE HANDLING
# ===================

def classify_source(source: str) -> ImageSource:
    """
    Decide whether a source string is inline base64 data or a URL.

    Rules, in order:
        - data:<type>/<subtype>;base64, prefix → BASE64 (prefix removed)
        - http:// or https:// → URL
        - strict base64 decode to non-empty bytes → BASE64
        - anything else → URL

    Short strings made only of base64 characters are ambiguous and end up
    as BASE64.
    """
    match = DATA_URI_PATTERN.match(source)
    if match:
        return ImageSource(
            kind=SourceKind.BASE64,
            data=source[match.end():].strip(),
            raw=source
        )

    if source.lower().startswith(URL_SCHEMES):
        return ImageSource(kind=SourceKind.URL, data=source.strip(), raw=source)

    if is_base64(source):
        return ImageSource(kind=SourceKind.BASE64, data=source.strip(), raw=source)

    return ImageSource(kind=SourceKind.URL, data=source.strip(), raw=source)


def decode_base64(data: str) -> bytes:
    """
    Strictly decode base64 data. Embedded whitespace is ignored.

    Raises:
        MediaBase64DecodeError: If data is not valid base64
    """
    compact = "".join(data.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MediaBase64DecodeError(str(e)) from e


def is_base64(value: str) -> bool:
    """Check whether value strictly decodes to non-empty bytes."""
    try:
        return bool(decode_base64(value))
    except MediaBase64DecodeError:
        return False


def get_extension_from_mime_type(mime_type: str) -> str:
    """
    Map a MIME type to the stored file extension.

    Raises:
        UnsupportedMediaTypeError: If the type is not in MIME_EXTENSION_MAP
    """
    try:
        return MIME_EXTENSION_MAP[mime_type]
    except KeyError:
        raise UnsupportedMediaTypeError(mime_type) from None


def _sniff_container(head: bytes) -> Optional[str]:
    """Identify containers whose payload decides the MIME type."""
    if head.startswith(GLTF_BINARY_SIGNATURE):
        return "model/gltf-binary"
    if head.startswith(OGG_SIGNATURE):
        is_video = any(marker in head for marker in OGG_VIDEO_MARKERS)
        return "video/ogg" if is_video else "audio/ogg"
    if head.startswith(ASF_HEADER_GUID):
        return "video/x-ms-wmv" if ASF_VIDEO_MEDIA_GUID in head else "audio/x-ms-wma"
    return None


def _is_text(head: bytes) -> bool:
    """Check whether head is printable UTF-8 (a cut-off last character is allowed)."""
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        text = decoder.decode(head, final=False)
    except UnicodeDecodeError:
        return False
    return all(char.isprintable() or char in TEXT_WHITESPACE for char in text)


def detect_mime_type(path: Path) -> str:
    """
    Sniff the MIME type of a file from its content.

    Resolution order:
        1. glTF, Ogg and ASF containers are decided by their payload
        2. first sniffer candidate whose type (after aliasing) is supported
        3. first named candidate, reported as-is so it can be rejected
        4. printable UTF-8 → text/plain
        5. nameless signatures only → image/jpeg
        6. nothing matched → application/octet-stream

    A file that cannot be read is assumed to be image/jpeg.
    """
    try:
        with path.open("rb") as f:
            head = f.read(SNIFF_HEAD_SIZE)
        candidates = puremagic.magic_file(str(path))
    except (OSError, ValueError, puremagic.PureError) as e:
        logger.warning("mime_detection_failed", path=str(path), error=str(e))
        return DEFAULT_MIME_TYPE

    container_type = _sniff_container(head)
    if container_type:
        return container_type

    named = [
        MIME_TYPE_ALIASES.get(candidate.mime_type, candidate.mime_type)
        for candidate in candidates
        if candidate.mime_type
    ]
    for mime_type in named:
        if mime_type in MIME_EXTENSION_MAP:
            return mime_type
    if named:
        return named[0]

    if _is_text(head):
        return TEXT_MIME_TYPE

    return DEFAULT_MIME_TYPE if candidates else UNKNOWN_MIME_TYPE


@contextmanager
def temporary_media_file(content: bytes) -> Iterator[Path]:
    """
    Write content to a temporary file that is removed on exit.

    Removal happens whether the body returns or raises.

    Raises:
        MediaContentSaveError: If the file cannot be created or written
    """
    try:
        fd, name = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX)
    except OSError as e:
        raise MediaContentSaveError(f"Cannot create temp file: {e}") from e

    path = Path(name)
    try:
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        except OSError as e:
            raise MediaContentSaveError(f"Cannot write temp file: {e}") from e
        yield path
    finally:
        path.unlink(missing_ok=True)


# ===================
# SERVICE
# ===================

class MediaService:
    """
    Media ingestion service.

    Configuration is fixed per instance: an optional media folder name
    (unset means the storage default folder) and the maximum number of
    images per call.
    """

    def __init__(
        self,
        folder_name: Optional[str] = None,
        images_limit: Optional[int] = None,
        storage: Optional[SupabaseMediaStorage] = None
    ):
        if images_limit is not None and images_limit < 1:
            raise ValueError(f"images_limit must be at least 1, got {images_limit}")

        self.db = get_supabase_client()
        self.folder_name = folder_name if folder_name is not None else settings.media_folder_name
        self.images_limit = images_limit if images_limit is not None else settings.media_images_limit
        self.storage = storage or SupabaseMediaStorage()
        self.storage_folder = settings.media_storage_folder

    @property
    def media_folder_configured(self) -> bool:
        """Check if media rows should be placed in a named folder."""
        return bool(self.folder_name)

    def assign_media(self, sources: list[str]) -> list[MediaReference]:
        """
        Ingest image sources and return media references in input order.

        Only the first images_limit sources are used; the rest are dropped
        without notice. The first failure aborts the call and nothing is
        returned for sources already processed.

        Args:
            sources: URLs and/or base64 strings

        Returns:
            One MediaReference per ingested source

        Raises:
            MediaUploadError: A URL could not be fetched
            MediaBase64DecodeError: Inline data could not be decoded
            MediaContentSaveError: Bytes could not be stored
        """
        if not sources:
            return []

        limited = sources[:self.images_limit]
        if len(limited) < len(sources):
            logger.debug(
                "media_sources_truncated",
                received=len(sources),
                limit=self.images_limit
            )

        references = []
        for source in limited:
            image = classify_source(source)
            if image.is_base64:
                media_id = self.save_base64_image_to_media(image.data)
            else:
                media_id = self.save_image_to_media(image.data)
            references.append(MediaReference(media_id=media_id))

        logger.info("media_assigned", count=len(references))
        return references

    def save_image_to_media(self, url: str) -> str:
        """
        Download an image and store it as media.

        Raises:
            MediaUploadError: If the download fails
            MediaContentSaveError: If storing the bytes fails
        """
        content = download_image(url)
        return self.save_file_content_to_media(content)

    def save_base64_image_to_media(self, data: str) -> str:
        """
        Decode base64 data (without data URI prefix) and store it as media.

        Raises:
            MediaBase64DecodeError: If decoding fails or yields nothing
            MediaContentSaveError: If storing the bytes fails
        """
        content = decode_base64(data)
        if not content:
            raise MediaBase64DecodeError("Empty content after decode")

        return self.save_file_content_to_media(content)

    def save_file_content_to_media(self, content: bytes) -> str:
        """
        Register bytes as a media record and upload them.

        Returns:
            New media id

        Raises:
            MediaContentSaveError: On temp file, MIME type, insert or upload failure
        """
        try:
            with temporary_media_file(content) as path:
                mime_type = detect_mime_type(path)
                extension = get_extension_from_mime_type(mime_type)

                file_name = new_id()
                media_id = new_id()

                media_file = MediaFile(
                    path=path,
                    mime_type=mime_type,
                    extension=extension,
                    file_size=path.stat().st_size,
                )

                media_data = MediaCreate(
                    id=media_id,
                    name=file_name,
                    file_extension=extension,
                    mime_type=mime_type,
                )
                if self.media_folder_configured:
                    media_data.media_folder_id = self.get_media_folder_id()

                logger.info(
                    "creating_media",
                    media_id=media_id,
                    mime_type=mime_type,
                    extension=extension,
                    media_folder_id=media_data.media_folder_id
                )

                self.db.table("media").insert(
                    media_data.model_dump(exclude_none=True)
                ).execute()

                self.storage.save_media_file(
                    media_file,
                    f"{file_name}.{extension}",
                    self.storage_folder,
                    media_id,
                )

                return media_id

        except MediaHelperError:
            raise
        except Exception as e:
            logger.error(
                "save_media_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            raise MediaContentSaveError(str(e)) from e

    # ===================
    # MEDIA FOLDER
    # ===================

    def get_media_folder_id(self) -> str:
        """
        Find the configured media folder or create it.

        A new folder gets the fixed thumbnail configuration. Existing folders
        are returned as-is; their configuration is never updated. Lookup and
        insert are not atomic, so concurrent callers can create duplicates.
        """
        result = (
            self.db.table("media_folder")
            .select("*")
            .eq("name", self.folder_name)
            .limit(1)
            .execute()
        )
        if result.data:
            return MediaFolderResponse.model_validate(result.data[0]).id

        media_folder_id = new_id()

        logger.info("creating_media_folder", name=self.folder_name, folder_id=media_folder_id)

        self.db.table("media_folder").insert({
            "id": media_folder_id,
            "name": self.folder_name,
            "configuration": {
                "create_thumbnails": True,
                "thumbnail_quality": THUMBNAIL_QUALITY,
                "media_thumbnail_sizes": self.get_media_thumbnail_sizes(),
                "private": False,
            },
            "use_parent_configuration": False,
            "level": MEDIA_FOLDER_LEVEL,
        }).execute()

        return media_folder_id

    def get_media_thumbnail_sizes(self) -> list[dict[str, str]]:
        """
        Resolve THUMBNAIL_SIZES to thumbnail size ids.

        Sizes are looked up by (width, height) and created when missing.

        Returns:
            [{"id": ...}, ...] in THUMBNAIL_SIZES order
        """
        sizes = []
        for size in THUMBNAIL_SIZES:
            result = (
                self.db.table("media_thumbnail_size")
                .select("*")
                .eq("width", size["width"])
                .eq("height", size["height"])
                .limit(1)
                .execute()
            )
            if result.data:
                existing = ThumbnailSizeResponse.model_validate(result.data[0])
                sizes.append({"id": existing.id})
                continue

            size_id = new_id()
            logger.info("creating_thumbnail_size", size_id=size_id, **size)
            self.db.table("media_thumbnail_size").insert({"id": size_id, **size}).execute()
            sizes.append({"id": size_id})

        return sizes


# Singleton instance
_media_service: Optional[MediaService] = None


def get_media_service() -> MediaService:
    """Get or create MediaService instance."""
    global _media_service
    if _media_service is None:
        _media_service = MediaService()
    return _media_service
