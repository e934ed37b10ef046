"""
Poll-based monitor for a single JSON file.

Runs an asyncio task that wakes every ``interval_seconds``, compares the file's
modification time with the last one observed, and on change reloads the file
and publishes the new document. Results are delivered on four event channels:
``file_checked``, ``data_loaded``, ``monitoring_error`` and ``status_changed``.
"""

import asyncio
import math
import logging
from pathlib import Path
from typing import Any

from json_monitor.config import MonitorConfig, get_config
from json_monitor.core.interfaces import IContentReader, IFileMonitor
from json_monitor.models import (
    DataLoadedEvent,
    FileCheckedEvent,
    MonitoringError,
    MonitoringErrorEvent,
    MonitorPhase,
    MonitorState,
    ObservableProperties,
    StatusChangedEvent,
)
from json_monitor.models.exceptions import raise_invalid_argument
from json_monitor.monitoring.events import EventChannel
from json_monitor.reader import JsonContentReader

logger = logging.getLogger(__name__)


class FileMonitor(IFileMonitor):
    """
    Watches one JSON file by polling its modification time.

    Only one monitoring loop runs per instance; starting again first stops the
    running loop. ``force_reload`` and ``check_once`` may be called at any time,
    including while the loop is running. The check-and-update of the tracked
    modification time is serialised by a lock.
    """

    def __init__(self, config: MonitorConfig | None = None, reader: IContentReader | None = None):
        """
        Initialize the file monitor.

        Args:
            config: Monitor configuration (global configuration if not provided)
            reader: Optional content reader (will create if not provided)
        """
        self.config = config or get_config()
        self.reader = reader or JsonContentReader(self.config)

        # Notification channels
        self.file_checked: EventChannel[FileCheckedEvent] = EventChannel("file_checked")
        self.data_loaded: EventChannel[DataLoadedEvent] = EventChannel("data_loaded")
        self.monitoring_error: EventChannel[MonitoringErrorEvent] = EventChannel("monitoring_error")
        self.status_changed: EventChannel[StatusChangedEvent] = EventChannel("status_changed")

        # Fields a presentation layer binds to
        self.properties = ObservableProperties()
        self.properties.define("is_monitoring", False)
        self.properties.define("current_path", None)
        self.properties.define("status_message", "Ready")

        # Monitoring state
        self._state = MonitorState()
        self._lock = asyncio.Lock()
        self._task: asyncio.Task[None] | None = None
        self._stop_event: asyncio.Event | None = None
        self._cancel_event: asyncio.Event | None = None
        self._interval_seconds: float | None = None
        self._closed = False

    async def start_monitoring(
        self,
        path: str | Path,
        interval_seconds: float | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        """
        Start polling a file for changes.

        Performs one forced load before returning; the periodic checks then
        run in a background task until ``stop_monitoring`` is called or
        ``cancel_event`` is set.

        Args:
            path: JSON file to monitor
            interval_seconds: Seconds between checks (configured default if None)
            cancel_event: Optional external signal that stops the loop when set

        Raises:
            InvalidArgumentError: If the path is empty or the interval is not a positive finite number
            MonitoringError: If the monitor has been closed
        """
        if self._closed:
            raise MonitoringError(
                "Cannot start monitoring on a closed monitor",
                path=str(path) if path else None,
                operation="start_monitoring",
            )

        interval = self.config.poll_interval_seconds if interval_seconds is None else interval_seconds

        if path is None or not str(path).strip():
            raise_invalid_argument("File path cannot be empty", argument="path", actual_value=path)
        if not (interval > 0 and math.isfinite(interval)):
            raise_invalid_argument(
                "Interval must be positive and finite", argument="interval_seconds", actual_value=interval
            )

        if self._task is not None or self._state.phase != MonitorPhase.IDLE:
            await self.stop_monitoring()

        path_str = str(path)

        async with self._lock:
            self._state.begin(path_str, self.reader.last_modified_time(path_str))

        stop_event = asyncio.Event()
        self._interval_seconds = interval
        self._stop_event = stop_event
        self._cancel_event = cancel_event
        self._state.phase = MonitorPhase.ACTIVE

        logger.info("Starting file monitoring for: %s with interval: %ss", path_str, interval)

        self._update_properties("Monitoring started")
        self._publish_status(True, path_str)

        await self.force_reload()

        # A stop or restart during the forced load supersedes this start
        if self._stop_event is not stop_event or self._state.phase != MonitorPhase.ACTIVE:
            logger.debug("Monitoring of %s was stopped before the loop started", path_str)
            return

        self._task = asyncio.create_task(
            self._run(path_str, interval, stop_event, cancel_event), name=f"json-monitor:{path_str}"
        )

    async def stop_monitoring(self) -> None:
        """Stop polling and release the loop task. Does nothing when idle."""
        task = self._task

        if task is None and self._state.phase == MonitorPhase.IDLE:
            logger.debug("Monitoring not active, nothing to stop")
            return

        logger.info("Stopping file monitoring...")

        if self._stop_event is not None:
            self._stop_event.set()

        if task is not None and task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                if not task.done():
                    raise
                logger.debug("Monitoring task was cancelled before it could stop")

        self._finish_stop()

    async def force_reload(self, path: str | Path | None = None) -> None:
        """
        Read a file now and publish it as a forced load.

        Works whether or not monitoring is active and does not touch the
        tracked modification time.

        Args:
            path: File to read (tracked path if None)
        """
        target = str(path) if path is not None else self._state.target_path

        if not target or not target.strip():
            logger.warning("Cannot force reload - no file path provided")
            return

        try:
            await self._reload(target, was_forced=True)
        except Exception as e:
            logger.error("Error loading data from file %s: %s", target, e)
            self._report_error(e, target)

    async def force_refresh(self, path: str | Path | None = None) -> None:
        """Alias of ``force_reload``."""
        await self.force_reload(path)

    async def check_once(self) -> bool:
        """
        Run one check-and-maybe-reload cycle.

        Emits ``file_checked`` on every call and, when the file's modification
        time is strictly newer than the last one observed, reloads it and emits
        ``data_loaded`` with ``was_forced=False``.

        Returns:
            True if the file changed, False if it did not, no path is tracked,
            or the check failed
        """
        path = self._state.target_path
        if self._closed or not path:
            return False

        try:
            async with self._lock:
                if self._state.target_path != path:
                    logger.debug("Tracked path changed during check, skipping %s", path)
                    return False

                current_time = self.reader.last_modified_time(path)
                has_changed = self._state.has_changed(current_time)

                logger.debug("Checked %s: modified=%s changed=%s", path, current_time.isoformat(), has_changed)
                self.file_checked.emit(FileCheckedEvent(path=path, observed_time=current_time, has_changed=has_changed))

                if has_changed:
                    self._state.advance(current_time)
                    self._set_property("status_message", "File changed, loading data...")
                    await self._reload(path, was_forced=False)

                return has_changed

        except Exception as e:
            logger.error("Error checking for file changes %s: %s", path, e)
            self._report_error(e, path)
            return False

    async def check_for_changes(self) -> bool:
        """Alias of ``check_once``."""
        return await self.check_once()

    async def wait_until_stopped(self) -> None:
        """Block until the monitoring loop has finished."""
        task = self._task
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.done():
                raise

    async def aclose(self) -> None:
        """Stop monitoring and refuse further starts."""
        await self.stop_monitoring()
        self._closed = True
        logger.debug("File monitor closed")

    async def __aenter__(self) -> "FileMonitor":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def _run(
        self,
        path: str,
        interval: float,
        stop_event: asyncio.Event,
        cancel_event: asyncio.Event | None,
    ) -> None:
        """Tick until this run's stop event or the caller's cancel event is set."""
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + interval

        try:
            while True:
                timeout = max(0.0, next_tick - loop.time())
                if await self._wait_for_stop(timeout, stop_event, cancel_event):
                    logger.debug("File monitoring was cancelled for: %s", path)
                    break

                await self.check_once()

                # Missed ticks collapse into a single immediate one
                next_tick = max(next_tick + interval, loop.time())

        except asyncio.CancelledError:
            logger.debug("File monitoring task cancelled for: %s", path)
            raise
        except Exception as e:
            logger.error("Error during file monitoring for %s: %s", path, e)
            self._report_error(
                MonitoringError(
                    f"Monitoring loop failed: {e}",
                    path=path,
                    operation="monitor_loop",
                    underlying_error=e,
                ),
                path,
            )
        finally:
            if self._stop_event is stop_event:
                self._finish_stop()

    async def _wait_for_stop(
        self, timeout: float, stop_event: asyncio.Event, cancel_event: asyncio.Event | None
    ) -> bool:
        """
        Sleep for up to ``timeout`` seconds.

        Returns:
            True if a stop or cancellation was signalled, False on timeout
        """
        events = [event for event in (stop_event, cancel_event) if event is not None]
        if any(event.is_set() for event in events):
            return True

        waiters = [asyncio.ensure_future(event.wait()) for event in events]
        try:
            done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                if not waiter.done():
                    waiter.cancel()
        return bool(done)

    async def _reload(self, path: str, was_forced: bool) -> None:
        document = await self.reader.read_document(path)

        if was_forced:
            self._set_property("status_message", "Data refreshed manually")
        else:
            self._set_property("status_message", "Data updated from file")

        self.data_loaded.emit(DataLoadedEvent(document=document, was_forced=was_forced))

    def _finish_stop(self) -> None:
        """Run the stop sequence once: release the loop, reset state, publish."""
        if self._state.phase == MonitorPhase.IDLE:
            return

        path = self._state.target_path
        self._state.phase = MonitorPhase.STOPPING

        self._task = None
        self._stop_event = None
        self._cancel_event = None
        self._interval_seconds = None
        self._state.reset()

        logger.info("File monitoring stopped for: %s", path)

        self._update_properties("Monitoring stopped")
        self._publish_status(False, path)

    def _publish_status(self, is_active: bool, path: str | None) -> None:
        try:
            self.status_changed.emit(StatusChangedEvent(is_active=is_active, path=path))
        except Exception as e:
            logger.error("Status listener failed for %s: %s", path, e)
            self._report_error(e, path)

    def _report_error(self, error: Exception, path: str | None) -> None:
        self._set_property("status_message", f"Error: {error}")
        self._emit_error(error, path)

    def _emit_error(self, error: Exception, path: str | None) -> None:
        try:
            self.monitoring_error.emit(MonitoringErrorEvent(error=error, path=path))
        except Exception:
            logger.exception("Error listener failed while reporting: %s", error)

    def _set_property(self, name: str, value: Any) -> None:
        """Assign an observable field; a failing property listener is reported, not raised."""
        try:
            self.properties.set(name, value)
        except Exception as e:
            logger.error("Property listener failed for %s: %s", name, e)
            self._emit_error(e, self._state.target_path)

    def _update_properties(self, status_message: str) -> None:
        self._set_property("is_monitoring", self._state.is_active)
        self._set_property("current_path", self._state.target_path)
        self._set_property("status_message", status_message)

    @property
    def is_monitoring(self) -> bool:
        """Check if the monitoring loop is active."""
        return self._state.is_active

    @property
    def current_path(self) -> str | None:
        """Get the tracked file path."""
        return self._state.target_path

    @property
    def phase(self) -> MonitorPhase:
        return self._state.phase

    @property
    def state(self) -> MonitorState:
        """Get a copy of the monitoring state."""
        return self._state.model_copy()

    @property
    def interval_seconds(self) -> float | None:
        return self._interval_seconds

    @property
    def is_closed(self) -> bool:
        return self._closed

    def get_monitoring_status(self) -> dict[str, Any]:
        """
        Get a summary of the monitor for display.

        Returns:
            Dictionary with lifecycle, path, timing and listener information
        """
        return {
            "phase": MonitorPhase(self._state.phase).value,
            "is_monitoring": self.is_monitoring,
            "current_path": self.current_path,
            "interval_seconds": self._interval_seconds,
            "last_known_modification_time": self._state.last_known_modification_time.isoformat(),
            "status_message": self.properties.get("status_message"),
            "listeners": {
                channel.name: channel.listener_count
                for channel in (self.file_checked, self.data_loaded, self.monitoring_error, self.status_changed)
            },
        }
