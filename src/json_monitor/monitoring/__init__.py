"""
Monitoring package for poll-based change detection.

This package provides the monitor loop that polls a JSON file's
modification time and the event channels it publishes results on.
"""

from .events import EventChannel
from .file_monitor import FileMonitor

__all__ = [
    "EventChannel",
    "FileMonitor",
]
