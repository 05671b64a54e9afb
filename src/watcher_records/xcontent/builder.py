"""Incremental JSON document builder.

Mirrors the token parser: objects and arrays are opened and closed
explicitly, so nested writers (e.g. trigger events) can append their own
fields without knowing where in the document they sit.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import IO


class DocumentBuildError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class EncodeOptions:
    """Options handed down to every writer while encoding a document."""

    pretty: bool = False
    params: Mapping[str, str] = field(default_factory=dict)

    def param(self, key: str, default: str | None = None) -> str | None:
        return self.params.get(key, default)


class DocumentBuilder:
    def __init__(self) -> None:
        self._root: object = None
        self._has_root = False
        self._stack: list[dict[str, object] | list[object]] = []
        self._pending_name: str | None = None

    def _append(self, value: object) -> None:
        if not self._stack:
            if self._has_root:
                raise DocumentBuildError("document already has a root value")
            self._root = value
            self._has_root = True
            return
        container = self._stack[-1]
        if isinstance(container, dict):
            if self._pending_name is None:
                raise DocumentBuildError("object values require a field name")
            container[self._pending_name] = value
            self._pending_name = None
        else:
            container.append(value)

    def field_name(self, name: str) -> DocumentBuilder:
        if not self._stack or not isinstance(self._stack[-1], dict):
            raise DocumentBuildError(f"field [{name}] must be written inside an object")
        if self._pending_name is not None:
            raise DocumentBuildError(f"field [{self._pending_name}] has no value")
        self._pending_name = name
        return self

    def start_object(self, name: str | None = None) -> DocumentBuilder:
        if name is not None:
            self.field_name(name)
        obj: dict[str, object] = {}
        self._append(obj)
        self._stack.append(obj)
        return self

    def end_object(self) -> DocumentBuilder:
        if not self._stack or not isinstance(self._stack[-1], dict):
            raise DocumentBuildError("end_object without a matching start_object")
        if self._pending_name is not None:
            raise DocumentBuildError(f"field [{self._pending_name}] has no value")
        self._stack.pop()
        return self

    def start_array(self, name: str | None = None) -> DocumentBuilder:
        if name is not None:
            self.field_name(name)
        arr: list[object] = []
        self._append(arr)
        self._stack.append(arr)
        return self

    def end_array(self) -> DocumentBuilder:
        if not self._stack or not isinstance(self._stack[-1], list):
            raise DocumentBuildError("end_array without a matching start_array")
        self._stack.pop()
        return self

    def field(self, name: str, value: object) -> DocumentBuilder:
        self.field_name(name)
        self._append(value)
        return self

    def value(self, value: object) -> DocumentBuilder:
        self._append(value)
        return self

    def to_bytes(self, *, pretty: bool = False) -> bytes:
        if self._stack:
            raise DocumentBuildError("document has unclosed objects or arrays")
        if not self._has_root:
            raise DocumentBuildError("document is empty")
        text = json.dumps(self._root, indent=2 if pretty else None, ensure_ascii=False)
        return text.encode("utf-8")

    def write_to(self, sink: IO[bytes], *, pretty: bool = False) -> None:
        sink.write(self.to_bytes(pretty=pretty))
