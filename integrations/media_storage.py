"""
Media storage backed by a Supabase Storage bucket.

Receives the temporary file produced by media ingestion and persists its
bytes under a path derived from the media id. Thumbnails are generated out
of band by the platform.
"""

from typing import Optional
import structlog

from config import settings, get_supabase_client, get_admin_client
from models.media import MediaFile

logger = structlog.get_logger(__name__)


class SupabaseMediaStorage:
    """
    Upload media bytes to a storage bucket.

    Uses the service role client when configured; anon keys are usually
    not allowed to write to buckets.
    """

    def __init__(self, bucket: Optional[str] = None):
        self.client = get_admin_client() or get_supabase_client()
        self.bucket = bucket or settings.media_bucket

    def build_path(self, folder: str, media_id: str, file_name: str) -> str:
        """Object path for a media file: <folder>/<media_id>/<file_name>."""
        return f"{folder.strip('/')}/{media_id}/{file_name}"

    def save_media_file(
        self,
        media_file: MediaFile,
        file_name: str,
        folder: str,
        media_id: str
    ) -> str:
        """
        Persist a media file.

        Args:
            media_file: Local file with sniffed MIME type and size
            file_name: Stored name including extension
            folder: Storage folder
            media_id: Pre-assigned media id the bytes belong to

        Returns:
            Object path inside the bucket

        Raises:
            Exception: Whatever the storage client raises
        """
        path = self.build_path(folder, media_id, file_name)

        logger.info(
            "uploading_media_file",
            bucket=self.bucket,
            path=path,
            mime_type=media_file.mime_type,
            file_size=media_file.file_size
        )

        try:
            with open(media_file.path, "rb") as f:
                self.client.storage.from_(self.bucket).upload(
                    path=path,
                    file=f.read(),
                    file_options={
                        "content-type": media_file.mime_type,
                        "upsert": "false",
                    },
                )

        except Exception as e:
            logger.error(
                "media_upload_failed",
                bucket=self.bucket,
                path=path,
                error=str(e),
                error_type=type(e).__name__
            )
            raise

        logger.info("media_file_uploaded", media_id=media_id, path=path)
        return path
