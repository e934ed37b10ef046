"""Data models and schemas for the JSON monitor."""

from json_monitor.models.document import Entry, RootDocument
from json_monitor.models.events import (
    DataLoadedEvent,
    FileCheckedEvent,
    MonitorEvent,
    MonitoringErrorEvent,
    StatusChangedEvent,
)
from json_monitor.models.exceptions import (
    BaseError,
    ConfigurationError,
    DocumentNotFoundError,
    InvalidArgumentError,
    MonitoringError,
    ParsingError,
)
from json_monitor.models.observable import ObservableField, ObservableProperties
from json_monitor.models.state import MIN_TIMESTAMP, MonitorPhase, MonitorState

__all__ = [
    "Entry",
    "RootDocument",
    "MonitorEvent",
    "FileCheckedEvent",
    "DataLoadedEvent",
    "MonitoringErrorEvent",
    "StatusChangedEvent",
    "MIN_TIMESTAMP",
    "MonitorPhase",
    "MonitorState",
    "ObservableField",
    "ObservableProperties",
    "BaseError",
    "ConfigurationError",
    "DocumentNotFoundError",
    "InvalidArgumentError",
    "MonitoringError",
    "ParsingError",
]
