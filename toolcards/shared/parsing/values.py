"""Coerce raw block values into typed ``Value`` objects.

Rules are tried in order and the first that applies wins:

1. a complete JSON literal
2. a bulleted list with ``key: value`` bullets, regrouped into entities
3. a plain bulleted list
4. ``true`` / ``false`` in any case
5. a number literal covering the whole string
6. the trimmed text
"""
from __future__ import annotations

import json
import logging
import math
import re

from toolcards.shared.config import ParserConfig
from toolcards.shared.models.result import (
    BoolValue,
    ListValue,
    NumberValue,
    TemplateListValue,
    TextValue,
    Value,
    value_from_json,
)

from .lines import LineSyntax
from .templates import TemplateGrouper

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

NOT_JSON = object()


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(raw: str) -> float:
    number = float(raw)
    if not math.isfinite(number):
        raise ValueError(f"number out of range: {raw}")
    return number


def parse_json_literal(raw: str) -> object:
    """Decode *raw* as strict JSON, or return ``NOT_JSON``."""
    try:
        return json.loads(
            raw, parse_constant=_reject_constant, parse_float=_finite_float,
        )
    except (ValueError, TypeError, RecursionError):
        return NOT_JSON


def parse_number(raw: str) -> int | float | None:
    """Parse a whole-string number literal.

    Literals Python cannot hold as a finite number (overflowing floats,
    integers past the int-to-str digit limit) return ``None`` and stay text.
    """
    if not _NUMBER_RE.fullmatch(raw):
        return None
    try:
        if any(ch in raw for ch in ".eE"):
            return _finite_float(raw)
        return int(raw)
    except (ValueError, OverflowError):
        return None


class ValueCoercer:
    def __init__(
        self,
        config: ParserConfig | None = None,
        grouper: TemplateGrouper | None = None,
        syntax: LineSyntax | None = None,
    ) -> None:
        config = config or ParserConfig()
        self._syntax = syntax or LineSyntax(config)
        self._grouper = grouper or TemplateGrouper(config, self._syntax)

    def bullet_items(self, raw: str) -> list[str]:
        """Bullet lines of *raw* with the marker stripped; empty items dropped."""
        items = []
        for line in raw.split("\n"):
            line = line.strip()
            if self._syntax.is_bullet(line):
                item = self._syntax.strip_bullet(line)
                if item:
                    items.append(item)
        return items

    def _has_bullet_continuation(self, raw: str) -> bool:
        return any(
            self._syntax.is_bullet(line.strip()) for line in raw.split("\n")[1:]
        )

    def coerce(self, raw: str) -> Value:
        text = raw.strip()

        parsed = parse_json_literal(text)
        if parsed is not NOT_JSON:
            return value_from_json(parsed)

        if self._has_bullet_continuation(text):
            items = self.bullet_items(text)
            if any(self._syntax.separator in item for item in items):
                entities = self._grouper.group(text)
                if entities:
                    return TemplateListValue(tuple(entities))
                logger.debug(
                    "ValueCoercer: no entities in %d bullet(s), keeping plain list",
                    len(items),
                )
            return ListValue(tuple(TextValue(item) for item in items))

        lowered = text.lower()
        if lowered == "true":
            return BoolValue(True)
        if lowered == "false":
            return BoolValue(False)

        number = parse_number(text)
        if number is not None:
            return NumberValue(number)

        return TextValue(text)
