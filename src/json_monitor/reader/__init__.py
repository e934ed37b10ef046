"""Reader package for loading the monitored JSON file."""

from .content_reader import JsonContentReader

__all__ = [
    "JsonContentReader",
]
