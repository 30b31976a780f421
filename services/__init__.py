"""
Business logic services.

Each service handles one domain area.
"""

from services.media_service import MediaService, get_media_service
from services.reference_data_service import (
    ReferenceDataService,
    get_reference_data_service,
)

__all__ = [
    "MediaService",
    "get_media_service",
    "ReferenceDataService",
    "get_reference_data_service",
]
