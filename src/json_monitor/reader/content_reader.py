"""
Content reader for the monitored JSON file.

Loads and parses the file into a RootDocument. Every failure collapses to an
absent result (None) or the MIN_TIMESTAMP sentinel plus a log line, so the
monitor loop can branch on return values alone.
"""

import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path

from json_monitor.config import MonitorConfig, get_config
from json_monitor.core.interfaces import IContentReader
from json_monitor.models import MIN_TIMESTAMP, DocumentNotFoundError, ParsingError, RootDocument
from json_monitor.parsers import TolerantJsonParser

logger = logging.getLogger(__name__)


class JsonContentReader(IContentReader):
    """
    Reads RootDocument JSON files from disk.

    The file read runs in a worker thread so a slow disk does not block the
    event loop driving the monitor.
    """

    def __init__(self, config: MonitorConfig | None = None, parser: TolerantJsonParser | None = None):
        """
        Initialize the reader.

        Args:
            config: Configuration (global configuration if not provided)
            parser: Optional parser (built from the configuration if not provided)
        """
        self.config = config or get_config()
        self.parser = parser or TolerantJsonParser(
            allow_comments=self.config.allow_comments,
            allow_trailing_commas=self.config.allow_trailing_commas,
        )

    async def read_document(self, path: str | Path | None) -> RootDocument | None:
        """
        Read and parse a file into a RootDocument.

        Args:
            path: Path to the JSON file

        Returns:
            The parsed document, or None if the path is empty, the file does
            not exist, or the content cannot be read or parsed
        """
        if path is None or not str(path).strip():
            logger.warning("File path is empty, nothing to read")
            return None

        file_path = Path(path)

        try:
            if not file_path.exists():
                missing = DocumentNotFoundError(f"JSON file does not exist: {file_path}", file_path=str(file_path))
                logger.warning("%s", missing)
                return None

            content = await asyncio.to_thread(file_path.read_text, encoding=self.config.file_encoding)
            document = self.parser.parse_string(content, source=str(file_path))

            if document is None:
                logger.warning("JSON file %s contains null, no document loaded", file_path)
                return None

            logger.debug("Loaded %s from %s", document, file_path)
            return document

        except ParsingError as e:
            logger.error("Failed to parse JSON from file %s: %s", file_path, e)
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading JSON file %s: %s", file_path, e)
            return None
        except Exception as e:
            logger.error("Unexpected error reading JSON file %s: %s", file_path, e)
            return None

    def last_modified_time(self, path: str | Path | None) -> datetime:
        """
        Get the last write time of a file.

        Args:
            path: Path to the file

        Returns:
            Timezone-aware UTC modification time, or MIN_TIMESTAMP if the
            path is empty, the file is missing, or the lookup fails
        """
        if path is None or not str(path).strip():
            return MIN_TIMESTAMP

        file_path = Path(path)

        try:
            if not file_path.exists():
                return MIN_TIMESTAMP

            return datetime.fromtimestamp(file_path.stat().st_mtime, tz=UTC)

        except (OSError, OverflowError, ValueError) as e:
            logger.error("Error getting last write time for file %s: %s", file_path, e)
            return MIN_TIMESTAMP
