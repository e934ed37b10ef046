"""
Tolerant JSON parser for monitored data files.

Hand-edited data files often carry ``//`` or ``/* */`` comments and trailing
commas. This module removes both outside of string literals, decodes the
result with the standard ``json`` module, and validates it into a
RootDocument.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from json_monitor.models.document import RootDocument
from json_monitor.models.exceptions import ParsingError

logger = logging.getLogger(__name__)


class TolerantJsonParser:
    """
    Parser for RootDocument JSON with comment and trailing-comma support.

    Both relaxations can be switched off, in which case the input must be
    strict JSON.
    """

    def __init__(self, allow_comments: bool = True, allow_trailing_commas: bool = True):
        """
        Initialize the parser.

        Args:
            allow_comments: Remove line and block comments before decoding
            allow_trailing_commas: Remove commas directly before ``}`` or ``]``
        """
        self.allow_comments = allow_comments
        self.allow_trailing_commas = allow_trailing_commas

    def parse_string(self, content: str, source: str | None = None) -> RootDocument | None:
        """
        Parse JSON text into a RootDocument.

        Args:
            content: Raw file content
            source: Optional file path for error context

        Returns:
            The validated document, or None if the content is a JSON ``null``

        Raises:
            ParsingError: If the text is not valid JSON, is not an object,
                or does not fit the document shape
        """
        data = self.loads(content, source)

        if data is None:
            return None

        if not isinstance(data, dict):
            raise ParsingError(
                f"Expected a JSON object at top level, got {type(data).__name__}",
                operation="parse_string",
                file_path=source,
            )

        try:
            return RootDocument.model_validate(data)
        except ValidationError as e:
            raise ParsingError(
                f"JSON does not match the document shape: {e.error_count()} validation error(s)",
                operation="validate",
                file_path=source,
                underlying_error=e,
            ) from e

    def loads(self, content: str, source: str | None = None) -> Any:
        """
        Decode JSON text after applying the enabled relaxations.

        Raises:
            ParsingError: If the text cannot be decoded
        """
        text = content
        if self.allow_comments:
            text = strip_comments(text, source)
        if self.allow_trailing_commas:
            text = strip_trailing_commas(text)

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ParsingError(
                f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                operation="decode",
                file_path=source,
                line_number=e.lineno,
                underlying_error=e,
            ) from e


def strip_comments(text: str, source: str | None = None) -> str:
    """
    Remove ``//`` and ``/* */`` comments that appear outside string literals.

    Newlines inside block comments are kept so decoder line numbers still
    point at the input lines.

    Raises:
        ParsingError: If a block comment is never closed
    """
    out: list[str] = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        char = text[i]

        if in_string:
            out.append(char)
            if char == '\\' and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
            out.append(char)
            i += 1
        elif text.startswith('//', i):
            end = text.find('\n', i)
            i = length if end == -1 else end
        elif text.startswith('/*', i):
            end = text.find('*/', i + 2)
            if end == -1:
                raise ParsingError(
                    "Unterminated block comment",
                    operation="strip_comments",
                    file_path=source,
                    line_number=text.count('\n', 0, i) + 1,
                )
            out.append(' ')
            out.append('\n' * text.count('\n', i, end))
            i = end + 2
        else:
            out.append(char)
            i += 1

    return ''.join(out)


def strip_trailing_commas(text: str) -> str:
    """Remove commas that are followed only by whitespace and a closing bracket."""
    out: list[str] = []
    i = 0
    length = len(text)
    in_string = False

    while i < length:
        char = text[i]

        if in_string:
            out.append(char)
            if char == '\\' and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
        elif char == ',':
            j = i + 1
            while j < length and text[j] in ' \t\r\n':
                j += 1
            if j < length and text[j] in '}]':
                logger.debug("Dropping trailing comma at offset %d", i)
                i += 1
                continue

        out.append(char)
        i += 1

    return ''.join(out)
