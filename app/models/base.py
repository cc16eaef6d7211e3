"""
Base Record Model

All records stored in a JSON document inherit from Record.

Field names are snake_case in Python and camelCase in the document file,
so a book is stored as {"publishedYear": 1949, "userId": "..."}.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def new_id() -> str:
    """Opaque unique identifier for a new record."""
    return str(uuid.uuid4())


class Record(BaseModel):
    """
    Base class for stored records.

    Every record has an opaque string id and creation/update timestamps.
    """

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible shape stored in the document."""
        return self.model_dump(mode="json", by_alias=True)
