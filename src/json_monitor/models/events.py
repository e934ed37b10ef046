"""Payload models for the four monitor notification channels."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from json_monitor.models.document import RootDocument


class MonitorEvent(BaseModel):
    """Common base for notification payloads."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    emitted_at: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Emission timestamp")


class FileCheckedEvent(MonitorEvent):
    """Result of one modification-time check."""

    path: str
    observed_time: datetime
    has_changed: bool

    def __str__(self) -> str:
        return f"FileChecked({self.path}, changed={self.has_changed})"


class DataLoadedEvent(MonitorEvent):
    """A reload finished; document is None when the file could not be read."""

    document: RootDocument | None = None
    was_forced: bool = False

    def __str__(self) -> str:
        return f"DataLoaded({self.document}, forced={self.was_forced})"


class MonitoringErrorEvent(MonitorEvent):
    """A fault caught while ticking, reloading or checking."""

    error: Exception
    path: str | None = None

    def __str__(self) -> str:
        return f"MonitoringError({self.path}: {self.error})"


class StatusChangedEvent(MonitorEvent):
    """Monitoring moved into or out of the active state."""

    is_active: bool
    path: str | None = None

    def __str__(self) -> str:
        state = "active" if self.is_active else "stopped"
        return f"StatusChanged({state}, {self.path})"
