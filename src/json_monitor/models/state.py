"""
Process-local monitoring state.

MonitorState is never persisted. It is created when monitoring starts, updated
on every tick, and reset when monitoring stops or the tracked path changes.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Earliest representable timestamp, used for "unknown/unavailable" modification times
MIN_TIMESTAMP = datetime.min.replace(tzinfo=UTC)


class MonitorPhase(str, Enum):
    """Monitor loop lifecycle phase."""

    IDLE = "idle"
    STARTING = "starting"
    ACTIVE = "active"
    STOPPING = "stopping"


class MonitorState(BaseModel):
    """Mutable state owned by a single FileMonitor."""

    target_path: str | None = Field(default=None, description="Path of the tracked file")
    last_known_modification_time: datetime = Field(
        default=MIN_TIMESTAMP, description="Newest modification time observed for the tracked path"
    )
    phase: MonitorPhase = Field(default=MonitorPhase.IDLE, description="Current lifecycle phase")

    model_config = ConfigDict(validate_assignment=True)

    @computed_field
    @property
    def is_active(self) -> bool:
        """Check whether the monitor loop is running."""
        return self.phase == MonitorPhase.ACTIVE

    def begin(self, path: str, modification_time: datetime) -> None:
        """Track a new path, discarding everything known about the previous one."""
        self.target_path = path
        self.last_known_modification_time = modification_time
        self.phase = MonitorPhase.STARTING

    def has_changed(self, observed_time: datetime) -> bool:
        """Equal timestamps count as unchanged."""
        return observed_time > self.last_known_modification_time

    def advance(self, observed_time: datetime) -> bool:
        """
        Move the last known modification time forward.

        Args:
            observed_time: Modification time just read from the file system

        Returns:
            True if the stored time moved, False if observed_time was not newer
        """
        if not self.has_changed(observed_time):
            return False
        self.last_known_modification_time = observed_time
        return True

    def reset(self) -> None:
        """Return to the idle state."""
        self.target_path = None
        self.last_known_modification_time = MIN_TIMESTAMP
        self.phase = MonitorPhase.IDLE
