"""
Console front end for the JSON monitor.

Wires configuration, logging and a FileMonitor together and renders the
monitor's notifications with rich.

Usage:
    json-monitor show data.json
    json-monitor watch data.json --interval 2 --duration 60
    json-monitor sample data.json
"""

import asyncio
import json
import logging
import logging.config
from datetime import UTC, datetime
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from json_monitor.config import MonitorConfig, get_config
from json_monitor.models import (
    DataLoadedEvent,
    FileCheckedEvent,
    InvalidArgumentError,
    MonitoringErrorEvent,
    RootDocument,
    StatusChangedEvent,
)
from json_monitor.monitoring import FileMonitor
from json_monitor.reader import JsonContentReader

logger = logging.getLogger(__name__)

console = Console()

SAMPLE_ITEMS = [
    ("Chainsaw", "Connected"),
    ("Leaf Blower", "Disconnected"),
    ("Hedge Trimmer", "Connected"),
    ("Lawn Mower", "Charging"),
]


def configure_logging(config: MonitorConfig, verbose: bool = False) -> None:
    """Apply the configured logging setup, forcing DEBUG when verbose."""
    log_config = config.get_log_config()
    if verbose:
        log_config["handlers"]["default"]["level"] = "DEBUG"
        log_config["loggers"]["json_monitor"]["level"] = "DEBUG"
    logging.config.dictConfig(log_config)


def create_document_table(document: RootDocument) -> Table:
    """Create a rich table listing the document's items."""
    title = document.title or "(untitled)"
    table = Table(title=f"📄 {title}", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Value", style="white")
    table.add_column("Timestamp", style="dim")

    for entry in document.items:
        timestamp = entry.timestamp.isoformat() if entry.timestamp else "-"
        table.add_row(entry.name, entry.value, timestamp)

    if document.last_modified:
        table.caption = f"Last modified: {document.last_modified.isoformat()}"

    return table


def build_sample_document() -> dict:
    """Build a sample garden tools document stamped with the current time."""
    now = datetime.now(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return {
        "title": "Garden Tools Connection Monitor",
        "lastModified": now,
        "items": [{"name": name, "value": value, "timestamp": now} for name, value in SAMPLE_ITEMS],
    }


class ConsoleReporter:
    """Prints monitor notifications to the console."""

    def __init__(self, output: Console, show_checks: bool = False):
        self.output = output
        self.show_checks = show_checks
        self.loads = 0
        self.errors = 0

    def attach(self, monitor: FileMonitor) -> None:
        monitor.file_checked.subscribe(self.on_file_checked)
        monitor.data_loaded.subscribe(self.on_data_loaded)
        monitor.monitoring_error.subscribe(self.on_monitoring_error)
        monitor.status_changed.subscribe(self.on_status_changed)

    def on_file_checked(self, event: FileCheckedEvent) -> None:
        if self.show_checks or event.has_changed:
            marker = "✏️  changed" if event.has_changed else "unchanged"
            self.output.print(f"[dim]{event.emitted_at:%H:%M:%S}[/dim] 🔍 {event.path}: {marker}")

    def on_data_loaded(self, event: DataLoadedEvent) -> None:
        self.loads += 1
        origin = "refreshed manually" if event.was_forced else "updated from file"
        if event.document is None:
            self.output.print(f"⚠️  [yellow]Data {origin}, but the file could not be loaded[/yellow]")
            return
        self.output.print(f"✅ [green]Data {origin}[/green]")
        self.output.print(create_document_table(event.document))

    def on_monitoring_error(self, event: MonitoringErrorEvent) -> None:
        self.errors += 1
        self.output.print(f"❌ [red]Error:[/red] {event.error} ({event.path})")

    def on_status_changed(self, event: StatusChangedEvent) -> None:
        if event.is_active:
            self.output.print(f"▶️  [bold green]Monitoring started[/bold green] for [cyan]{event.path}[/cyan]")
        else:
            self.output.print(f"⏹️  [bold yellow]Monitoring stopped[/bold yellow] for [cyan]{event.path}[/cyan]")


async def run_watch(
    monitor: FileMonitor,
    path: Path,
    interval: float,
    duration: float | None,
) -> None:
    """
    Monitor a file until the duration elapses or the task is cancelled.

    Args:
        monitor: Monitor to drive
        path: File to monitor
        interval: Seconds between checks
        duration: Seconds to run for (until interrupted if None)
    """
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    timer = loop.call_later(duration, cancel_event.set) if duration else None

    try:
        await monitor.start_monitoring(path, interval_seconds=interval, cancel_event=cancel_event)
        await monitor.wait_until_stopped()
    finally:
        if timer is not None:
            timer.cancel()
        await monitor.aclose()


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Poll a JSON file for changes and display its content."""
    config = get_config()
    configure_logging(config, verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def resolve_path(path: Path | None, config: MonitorConfig) -> Path:
    """Use the given path, or the configured default file."""
    if path is not None:
        return path
    if config.default_file_path is None:
        raise click.UsageError("No PATH given and JSON_MONITOR_DEFAULT_FILE_PATH is not set")
    return config.default_file_path


@main.command()
@click.argument('path', type=click.Path(path_type=Path), required=False)
@click.pass_context
def show(ctx: click.Context, path: Path | None):
    """Read PATH once and print its items."""
    path = resolve_path(path, ctx.obj["config"])
    reader = JsonContentReader(ctx.obj["config"])
    document = asyncio.run(reader.read_document(path))

    if document is None:
        console.print(f"❌ [red]Could not load[/red] {path}")
        ctx.exit(1)

    console.print(create_document_table(document))
    modified = reader.last_modified_time(path)
    console.print(f"[dim]File modified: {modified.isoformat()}[/dim]")


@main.command()
@click.argument('path', type=click.Path(path_type=Path), required=False)
@click.option('--interval', '-i', type=float, default=None, help='Seconds between checks')
@click.option('--duration', '-t', type=float, default=None, help='Stop after this many seconds')
@click.option('--show-checks', is_flag=True, help='Print every check, not only changes')
@click.pass_context
def watch(ctx: click.Context, path: Path | None, interval: float | None, duration: float | None, show_checks: bool):
    """
    Monitor PATH and print its content whenever it changes.

    PATH defaults to the configured default file. Runs until interrupted
    with Ctrl+C or until --duration elapses.
    """
    config = ctx.obj["config"]
    path = resolve_path(path, config)
    interval = config.poll_interval_seconds if interval is None else interval

    console.print(
        Panel.fit(
            f"📁 Watching: [cyan]{path}[/cyan]\n⏱️  Interval: [yellow]{interval}s[/yellow]",
            title="JSON Monitor",
            border_style="blue",
        )
    )

    monitor = FileMonitor(config=config)
    reporter = ConsoleReporter(console, show_checks=show_checks)
    reporter.attach(monitor)

    try:
        asyncio.run(run_watch(monitor, path, interval, duration))
    except InvalidArgumentError as e:
        raise click.BadParameter(e.message) from e
    except KeyboardInterrupt:
        console.print("\n⚡ [yellow]Monitoring interrupted by user[/yellow]")

    console.print(f"[dim]{reporter.loads} load(s), {reporter.errors} error(s)[/dim]")


@main.command()
@click.argument('path', type=click.Path(path_type=Path))
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing file')
def sample(path: Path, force: bool):
    """Write a sample garden tools data file to PATH."""
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(build_sample_document(), indent=2) + "\n", encoding="utf-8")
    console.print(f"✅ [bold green]Created sample file[/bold green] {path}")


if __name__ == '__main__':
    main()
