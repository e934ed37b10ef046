"""Poll a JSON file for changes and publish its parsed content."""

from json_monitor.config import MonitorConfig, get_config
from json_monitor.models import (
    DataLoadedEvent,
    Entry,
    FileCheckedEvent,
    MonitoringErrorEvent,
    RootDocument,
    StatusChangedEvent,
)
from json_monitor.monitoring import EventChannel, FileMonitor
from json_monitor.reader import JsonContentReader

__version__ = "0.1.0"

__all__ = [
    "MonitorConfig",
    "get_config",
    "Entry",
    "RootDocument",
    "FileCheckedEvent",
    "DataLoadedEvent",
    "MonitoringErrorEvent",
    "StatusChangedEvent",
    "EventChannel",
    "FileMonitor",
    "JsonContentReader",
]
