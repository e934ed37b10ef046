"""
Parsers package for monitored JSON content.

Provides a tolerant JSON decoder that accepts comments and trailing commas
and validates the result into the document models.
"""

from .json_parser import TolerantJsonParser, strip_comments, strip_trailing_commas

__all__ = [
    "TolerantJsonParser",
    "strip_comments",
    "strip_trailing_commas",
]
