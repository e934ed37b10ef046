"""Core contracts shared by the reader and the monitor loop."""

from json_monitor.core.interfaces import IContentReader, IFileMonitor

__all__ = [
    "IContentReader",
    "IFileMonitor",
]
