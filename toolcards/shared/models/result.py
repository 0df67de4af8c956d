"""Tool result models.

A ``ToolResultRecord`` is what the parser hands to the rendering layer:
the tool name, a status, an optional title and an ordered mapping of
typed field values. Values form a closed tagged union so consumers can
branch on ``value.kind`` instead of probing for attributes.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Union

logger = logging.getLogger(__name__)


def _frozen_mapping(data: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(data or {}))


class ResultStatus(Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"

    @classmethod
    def from_raw(
        cls, raw: str | None, default: ResultStatus | None = None,
    ) -> ResultStatus:
        """Match *raw* case-insensitively, falling back to *default*."""
        fallback = default or cls.INFO
        if raw is None:
            return fallback
        text = str(raw).strip().lower()
        for status in cls:
            if status.value == text:
                return status
        logger.debug(
            "ResultStatus.from_raw: unknown status %r, using %s",
            raw, fallback.value,
        )
        return fallback


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    TEXT = "text"
    LIST = "list"
    OBJECT = "object"
    TEMPLATE_LIST = "template_list"


@dataclass(frozen=True)
class NullValue:
    kind: ClassVar[ValueKind] = ValueKind.NULL

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class BoolValue:
    value: bool
    kind: ClassVar[ValueKind] = ValueKind.BOOL

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class NumberValue:
    value: int | float
    kind: ClassVar[ValueKind] = ValueKind.NUMBER

    def to_python(self) -> int | float:
        return self.value


@dataclass(frozen=True)
class TextValue:
    value: str
    kind: ClassVar[ValueKind] = ValueKind.TEXT

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class ListValue:
    items: tuple[Value, ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.LIST

    def to_python(self) -> list:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class ObjectValue:
    entries: Mapping[str, Value] = field(default_factory=_frozen_mapping)
    kind: ClassVar[ValueKind] = ValueKind.OBJECT

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", _frozen_mapping(self.entries))

    def to_python(self) -> dict:
        return {key: value.to_python() for key, value in self.entries.items()}


@dataclass(frozen=True)
class Entity:
    """A nested record rebuilt from a flattened bulleted list."""

    title: str
    template: str | None = None
    attributes: Mapping[str, str] = field(default_factory=_frozen_mapping)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", _frozen_mapping(self.attributes))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"title": self.title}
        if self.template is not None:
            data["template"] = self.template
        data["attributes"] = dict(self.attributes)
        return data


@dataclass(frozen=True)
class TemplateListValue:
    entities: tuple[Entity, ...] = ()
    kind: ClassVar[ValueKind] = ValueKind.TEMPLATE_LIST

    def to_python(self) -> list[dict[str, Any]]:
        return [entity.to_dict() for entity in self.entities]


Value = Union[
    NullValue,
    BoolValue,
    NumberValue,
    TextValue,
    ListValue,
    ObjectValue,
    TemplateListValue,
]


def value_from_json(obj: Any) -> Value:
    """Convert a decoded JSON document into a ``Value`` tree."""
    if obj is None:
        return NullValue()
    # bool before number: bool is an int subclass
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, (int, float)):
        return NumberValue(obj)
    if isinstance(obj, str):
        return TextValue(obj)
    if isinstance(obj, list):
        return ListValue(tuple(value_from_json(item) for item in obj))
    if isinstance(obj, dict):
        return ObjectValue(
            {str(key): value_from_json(item) for key, item in obj.items()}
        )
    return TextValue(str(obj))


@dataclass(frozen=True)
class ToolResultRecord:
    """One parsed ``tool-result`` block."""

    tool: str = "Unknown Tool"
    status: ResultStatus = ResultStatus.INFO
    title: str | None = None
    fields: Mapping[str, Value] = field(default_factory=_frozen_mapping)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _frozen_mapping(self.fields))

    def get(self, key: str, default: Value | None = None) -> Value | None:
        return self.fields.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "tool": self.tool,
            "status": self.status.value,
        }
        if self.title is not None:
            data["title"] = self.title
        data["fields"] = {
            key: value.to_python() for key, value in self.fields.items()
        }
        return data
