"""
Base schemas and mixins for all models.
"""

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
        - Unknown store columns are ignored
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True,
        extra="ignore"
    )


class TimestampMixin(BaseModel):
    """Timestamps maintained by the store (absent on freshly built rows)."""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
