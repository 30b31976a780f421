"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,

    # Media ingestion
    MediaHelperError,
    MediaUploadError,
    MediaBase64DecodeError,
    MediaContentSaveError,
    UnsupportedMediaTypeError,
)

__all__ = [
    # Base
    "AppError",

    # Media
    "MediaHelperError",
    "MediaUploadError",
    "MediaBase64DecodeError",
    "MediaContentSaveError",
    "UnsupportedMediaTypeError",
]
