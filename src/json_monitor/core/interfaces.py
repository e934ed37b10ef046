"""
Abstract interfaces for the JSON monitor.

These interfaces define the contracts between the content reader and the
monitor loop, enabling dependency injection for testing.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from json_monitor.models import RootDocument


class IContentReader(ABC):
    """Interface for loading the monitored file. Implementations never raise."""

    @abstractmethod
    async def read_document(self, path: str | Path | None) -> RootDocument | None:
        """
        Read and parse a file into a RootDocument.

        Args:
            path: Path to the JSON file

        Returns:
            The parsed document, or None if the path is empty, the file is
            missing, or the content cannot be read or parsed
        """
        pass

    @abstractmethod
    def last_modified_time(self, path: str | Path | None) -> datetime:
        """
        Get the last write time of a file.

        Args:
            path: Path to the file

        Returns:
            Timezone-aware UTC modification time, or MIN_TIMESTAMP if the
            path is empty, the file is missing, or the lookup fails
        """
        pass


class IFileMonitor(ABC):
    """Interface for polling a single file and publishing its content."""

    @abstractmethod
    async def start_monitoring(self, path: str | Path, interval_seconds: float | None = None) -> None:
        """
        Start polling a file.

        Raises:
            InvalidArgumentError: If the path is empty or the interval is not a positive finite number
        """
        pass

    @abstractmethod
    async def stop_monitoring(self) -> None:
        """Stop polling. Does nothing when not monitoring."""
        pass

    @abstractmethod
    async def force_reload(self, path: str | Path | None = None) -> None:
        """Read a file now and publish the result as a forced load."""
        pass

    @abstractmethod
    async def check_once(self) -> bool:
        """
        Run one check-and-maybe-reload cycle.

        Returns:
            True if the tracked file changed since the last check
        """
        pass

    @property
    @abstractmethod
    def is_monitoring(self) -> bool:
        """Check if the monitor loop is active."""
        pass

    @property
    @abstractmethod
    def current_path(self) -> str | None:
        """Get the tracked file path."""
        pass
