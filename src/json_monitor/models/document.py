"""
Data models for the monitored JSON document.

A RootDocument is the whole parsed file and is replaced wholesale on every
successful reload. Each Entry is an immutable snapshot of one monitored item.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class CaseInsensitiveModel(BaseModel):
    """
    Base model that binds input keys to fields regardless of letter case.

    ``Title``, ``TITLE`` and ``title`` all populate the ``title`` field, and
    ``lastmodified`` populates the field aliased as ``lastModified``. Keys that
    match no field are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode='before')
    @classmethod
    def normalize_keys(cls, data: Any) -> Any:
        """Map incoming keys onto field names or aliases case-insensitively."""
        if not isinstance(data, dict):
            return data

        lookup: dict[str, str] = {}
        for name, field_info in cls.model_fields.items():
            target = field_info.alias or name
            lookup[name.lower()] = target
            if field_info.alias:
                lookup[field_info.alias.lower()] = target

        normalized = {}
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            target = lookup.get(key.lower())
            # First spelling wins when a file repeats a key in another case
            if target is not None and target not in normalized:
                normalized[target] = value
        return normalized


class Entry(CaseInsensitiveModel):
    """Immutable snapshot of one monitored item at parse time."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Item name")
    value: str = Field(default="", description="Item value or status")
    timestamp: datetime | None = Field(default=None, description="When the item was last updated")

    @field_validator('name', 'value', mode='before')
    @classmethod
    def validate_text(cls, v):
        """Bind a null name or value as an empty string."""
        if v is None:
            return ""
        return v

    def __str__(self) -> str:
        return f"Entry({self.name}={self.value})"


class RootDocument(CaseInsensitiveModel):
    """
    Represents the entire parsed JSON file.

    Missing or null ``items`` yields an empty sequence.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str = Field(default="", description="Document title")
    last_modified: datetime | None = Field(
        default=None, alias="lastModified", description="Timestamp recorded inside the document"
    )
    items: list[Entry] = Field(default_factory=list, description="Monitored items in file order")

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        """Bind a null title as an empty string."""
        if v is None:
            return ""
        return v

    @field_validator('items', mode='before')
    @classmethod
    def validate_items(cls, v):
        """Treat a null items value as an empty list."""
        if v is None:
            return []
        return v

    @computed_field
    @property
    def item_count(self) -> int:
        """Get the number of items in the document."""
        return len(self.items)

    def find_entry(self, name: str) -> Entry | None:
        """Return the first entry whose name matches, ignoring case."""
        wanted = name.lower()
        for entry in self.items:
            if entry.name.lower() == wanted:
                return entry
        return None

    def __str__(self) -> str:
        """String representation showing title and item count."""
        return f"RootDocument({self.title}, {self.item_count} items)"
