"""
Identifier generation.

Every record the toolkit inserts gets its id here, before the insert.
"""

from uuid import uuid4


def new_id() -> str:
    """Return a fresh 32-char hex UUID."""
    return uuid4().hex
