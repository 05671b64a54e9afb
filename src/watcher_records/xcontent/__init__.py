"""Structured document (JSON) parsing and building."""

from watcher_records.xcontent.builder import DocumentBuildError, DocumentBuilder, EncodeOptions
from watcher_records.xcontent.parser import (
    DocumentParseError,
    DocumentParser,
    Token,
    create_parser,
)

__all__ = [
    "DocumentBuildError",
    "DocumentBuilder",
    "DocumentParseError",
    "DocumentParser",
    "EncodeOptions",
    "Token",
    "create_parser",
]
