"""Pull-style token parser over JSON structured documents.

The parser walks a document as a flat stream of tokens (object/array
boundaries, field names and scalar values) so that callers can dispatch on
field names and hand sub-documents to other decoders without materialising
the whole record into their own types first.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from enum import Enum
from typing import IO, Any, cast


class Token(str, Enum):
    START_OBJECT = "start_object"
    END_OBJECT = "end_object"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    FIELD_NAME = "field_name"
    VALUE_STRING = "value_string"
    VALUE_NUMBER = "value_number"
    VALUE_BOOLEAN = "value_boolean"
    VALUE_NULL = "value_null"


class DocumentParseError(ValueError):
    pass


Source = bytes | bytearray | memoryview | str | IO[bytes] | IO[str]


class _JsonObject(list[tuple[str, Any]]):
    """Object fields in document order, duplicates kept."""


def _scalar_token(value: object) -> Token:
    if value is None:
        return Token.VALUE_NULL
    if isinstance(value, bool):
        return Token.VALUE_BOOLEAN
    if isinstance(value, int | float):
        return Token.VALUE_NUMBER
    return Token.VALUE_STRING


def _walk(node: object, name: str | None) -> Iterator[tuple[Token, str | None, object]]:
    if isinstance(node, _JsonObject):
        yield Token.START_OBJECT, name, node
        for field, value in node:
            yield Token.FIELD_NAME, field, field
            yield from _walk(value, field)
        yield Token.END_OBJECT, name, None
    elif isinstance(node, list):
        yield Token.START_ARRAY, name, node
        for item in node:
            yield from _walk(item, name)
        yield Token.END_ARRAY, name, None
    else:
        yield _scalar_token(node), name, node


def _to_python(node: object) -> object:
    if isinstance(node, _JsonObject):
        return {field: _to_python(value) for field, value in node}
    if isinstance(node, list):
        return [_to_python(item) for item in node]
    return node


class DocumentParser:
    """Token stream over a single JSON document.

    Stream sources are read lazily on the first call to `next_token()` and are
    closed together with the parser.
    """

    def __init__(self, source: Source) -> None:
        self._source = source
        self._tokens: Iterator[tuple[Token, str | None, object]] | None = None
        self._current_token: Token | None = None
        self._current_name: str | None = None
        self._current_value: object = None
        self._closed = False

    def __enter__(self) -> DocumentParser:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_token(self) -> Token | None:
        return self._current_token

    @property
    def current_name(self) -> str | None:
        """Name of the field the current token belongs to (None at the root)."""

        return self._current_name

    def _read_source(self) -> str:
        source = self._source
        if isinstance(source, str):
            return source
        if isinstance(source, bytes | bytearray | memoryview):
            raw = bytes(source)
        else:
            data = source.read()
            if isinstance(data, str):
                return data
            raw = data
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DocumentParseError("document is not valid UTF-8") from e

    def _load(self) -> Iterator[tuple[Token, str | None, object]]:
        text = self._read_source()
        if not text.strip():
            return iter(())
        try:
            root = json.loads(text, object_pairs_hook=_JsonObject)
        except json.JSONDecodeError as e:
            raise DocumentParseError(f"malformed document: {e.msg}") from e
        return _walk(root, None)

    def next_token(self) -> Token | None:
        """Advance to the next token; returns None once the document is exhausted."""

        if self._closed:
            raise DocumentParseError("parser is closed")
        if self._tokens is None:
            self._tokens = self._load()
        step = next(self._tokens, None)
        if step is None:
            self._current_token = None
            self._current_value = None
            return None
        self._current_token, self._current_name, self._current_value = step
        return self._current_token

    def text(self) -> str:
        if self._current_token is not Token.VALUE_STRING:
            raise DocumentParseError(
                f"expected a string value for [{self._current_name}], "
                f"found [{self._current_token}]"
            )
        return cast(str, self._current_value)

    def value(self) -> object:
        """The scalar value of the current token."""

        if self._current_token in (
            Token.VALUE_STRING,
            Token.VALUE_NUMBER,
            Token.VALUE_BOOLEAN,
            Token.VALUE_NULL,
        ):
            return self._current_value
        raise DocumentParseError(f"current token [{self._current_token}] is not a value")

    def skip_children(self) -> None:
        """Consume the object or array that starts at the current token.

        Leaves the parser on the matching end token. No-op for other tokens.
        """

        if self._current_token not in (Token.START_OBJECT, Token.START_ARRAY):
            return
        depth = 1
        while depth:
            token = self.next_token()
            if token is None:
                raise DocumentParseError("unexpected end of document")
            if token in (Token.START_OBJECT, Token.START_ARRAY):
                depth += 1
            elif token in (Token.END_OBJECT, Token.END_ARRAY):
                depth -= 1

    def map(self) -> dict[str, object]:
        """Materialise the object at the current token and move past it."""

        if self._current_token is not Token.START_OBJECT:
            raise DocumentParseError(f"expected an object, found [{self._current_token}]")
        result = cast(dict[str, object], _to_python(self._current_value))
        self.skip_children()
        return result

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._tokens = None
        close = getattr(self._source, "close", None)
        if callable(close):
            close()


def create_parser(source: Source) -> DocumentParser:
    return DocumentParser(source)
