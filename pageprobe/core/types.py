"""Shared types and dataclasses for pageprobe."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pageprobe.errors import SnapshotFormatError


class SessionState(str, Enum):
    IDLE = "idle"  # no URL submitted, or cleared
    LOADED = "loaded"


@dataclass
class InputDescriptor:
    """An <input> element as seen by the extractor."""

    type: str = "text"
    placeholder: str = ""
    name: str = ""
    id: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> InputDescriptor:
        data = _require_object(raw, "input")
        return cls(
            type=_str_field(data, "type", "input") or "text",
            placeholder=_str_field(data, "placeholder", "input"),
            name=_str_field(data, "name", "input"),
            id=_str_field(data, "id", "input"),
            value=_str_field(data, "value", "input"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "placeholder": self.placeholder,
            "name": self.name,
            "id": self.id,
            "value": self.value,
        }


@dataclass
class ButtonDescriptor:
    """A button-like element: <button>, a[role=button], submit/button inputs."""

    text: str = ""  # trimmed first non-empty of innerText, value, textContent
    id: str = ""
    className: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> ButtonDescriptor:
        data = _require_object(raw, "button")
        return cls(
            text=_str_field(data, "text", "button"),
            id=_str_field(data, "id", "button"),
            className=_str_field(data, "className", "button"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "id": self.id, "className": self.className}


@dataclass
class SelectDescriptor:
    name: str = ""
    id: str = ""
    options: list[str] = field(default_factory=list)  # option labels, document order

    @classmethod
    def from_dict(cls, raw: Any) -> SelectDescriptor:
        data = _require_object(raw, "select")
        options = data.get("options", [])
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise SnapshotFormatError("select.options must be a list of strings")
        return cls(
            name=_str_field(data, "name", "select"),
            id=_str_field(data, "id", "select"),
            options=list(options),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "id": self.id, "options": list(self.options)}


@dataclass
class PageSnapshot:
    """Serialized description of a page's interactive elements."""

    page: int  # 1-based capture number assigned by the host
    title: str
    url: str
    inputs: list[InputDescriptor] = field(default_factory=list)
    buttons: list[ButtonDescriptor] = field(default_factory=list)
    selects: list[SelectDescriptor] = field(default_factory=list)

    @classmethod
    def from_json(cls, text: str) -> PageSnapshot:
        """
        Parse snapshot JSON produced by page script.

        The text comes from untrusted content, so every field is type-checked.
        Raises SnapshotFormatError on anything that does not fit the shape.
        """
        try:
            raw = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise SnapshotFormatError(f"snapshot is not valid JSON: {exc}") from exc
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw: Any) -> PageSnapshot:
        data = _require_object(raw, "snapshot")
        page = data.get("page")
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise SnapshotFormatError(f"snapshot.page must be a positive integer, got {page!r}")
        return cls(
            page=page,
            title=_str_field(data, "title", "snapshot"),
            url=_str_field(data, "url", "snapshot"),
            inputs=[InputDescriptor.from_dict(i) for i in _list_field(data, "inputs")],
            buttons=[ButtonDescriptor.from_dict(b) for b in _list_field(data, "buttons")],
            selects=[SelectDescriptor.from_dict(s) for s in _list_field(data, "selects")],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "title": self.title,
            "url": self.url,
            "inputs": [i.to_dict() for i in self.inputs],
            "buttons": [b.to_dict() for b in self.buttons],
            "selects": [s.to_dict() for s in self.selects],
        }

    def to_json(self) -> str:
        """Same layout as JSON.stringify(info, null, 2) in the page."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @property
    def is_empty(self) -> bool:
        return not self.inputs and not self.buttons and not self.selects


def _require_object(raw: Any, where: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise SnapshotFormatError(f"{where} must be a JSON object, got {type(raw).__name__}")
    return raw


def _str_field(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SnapshotFormatError(f"{where}.{key} must be a string, got {type(value).__name__}")
    return value


def _list_field(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise SnapshotFormatError(f"snapshot.{key} must be a list")
    return value
