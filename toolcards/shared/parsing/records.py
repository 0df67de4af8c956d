"""Build a ``ToolResultRecord`` from the body of one block.

The body is walked line by line through three states:

``EXPECT_KEY``
    Waiting for the first ``key: value`` line.
``ACCUMULATE_SINGLE``
    A scalar value; plain lines are soft-wrapped onto it with a space.
``ACCUMULATE_MULTI``
    A list or structured value (empty, ``[...``, or a bullet after the
    key); every line is kept verbatim, including nested ``- key: value``
    bullets, until the next top-level ``key: value`` line.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from toolcards.shared.config import ParserConfig
from toolcards.shared.models.result import ResultStatus, ToolResultRecord, Value

from .lines import LineSyntax
from .values import ValueCoercer

logger = logging.getLogger(__name__)

RESERVED_KEYS = ("tool", "status", "title")


class WalkState(Enum):
    EXPECT_KEY = "expect_key"
    ACCUMULATE_SINGLE = "accumulate_single"
    ACCUMULATE_MULTI = "accumulate_multi"


@dataclass
class _Walk:
    """Per-call scratch state; never shared between calls."""

    state: WalkState = WalkState.EXPECT_KEY
    key: str = ""
    value: str = ""
    entries: list[tuple[str, str]] = field(default_factory=list)

    def flush(self) -> None:
        key, value = self.key, self.value.strip()
        if key and value:
            self.entries.append((key, value))
        self.key = ""
        self.value = ""


class RecordBuilder:
    def __init__(
        self,
        config: ParserConfig | None = None,
        coercer: ValueCoercer | None = None,
        syntax: LineSyntax | None = None,
    ) -> None:
        self._config = config or ParserConfig()
        self._syntax = syntax or LineSyntax(self._config)
        self._coercer = coercer or ValueCoercer(self._config, syntax=self._syntax)
        self._default_status = ResultStatus.from_raw(self._config.default_status)
        self._handlers = {
            WalkState.EXPECT_KEY: self._on_expect_key,
            WalkState.ACCUMULATE_SINGLE: self._on_single,
            WalkState.ACCUMULATE_MULTI: self._on_multi,
        }

    # ── State machine ──

    def _begin(self, walk: _Walk, line: str) -> None:
        key, value, _ = self._syntax.split(line)
        walk.key = key
        walk.value = value
        if not value or value.startswith("[") or self._syntax.is_bullet(value):
            walk.state = WalkState.ACCUMULATE_MULTI
        else:
            walk.state = WalkState.ACCUMULATE_SINGLE

    def _on_expect_key(self, walk: _Walk, line: str) -> None:
        if self._syntax.separator in line:
            self._begin(walk, line)

    def _on_single(self, walk: _Walk, line: str) -> None:
        if not line:
            return
        if self._syntax.starts_entry(line):
            walk.flush()
            self._begin(walk, line)
        else:
            walk.value = f"{walk.value} {line}" if walk.value else line

    def _on_multi(self, walk: _Walk, line: str) -> None:
        if self._syntax.looks_like_entry(line):
            walk.flush()
            self._begin(walk, line)
        else:
            walk.value += "\n" + line

    def walk(self, body: str) -> list[tuple[str, str]]:
        """Return the raw ``(key, value)`` pairs of *body* in source order."""
        walk = _Walk()
        for raw_line in body.strip().split("\n"):
            line = raw_line.strip()
            if not line and walk.state is WalkState.EXPECT_KEY:
                continue
            self._handlers[walk.state](walk, line)
        walk.flush()
        return walk.entries

    # ── Record assembly ──

    def build(self, body: str) -> ToolResultRecord:
        tool = self._config.default_tool
        status = self._default_status
        title: str | None = None
        fields: dict[str, Value] = {}

        for key, raw in self.walk(body):
            reserved = key.lower()
            if reserved == "tool":
                tool = raw
            elif reserved == "status":
                status = ResultStatus.from_raw(raw, self._default_status)
            elif reserved == "title":
                title = raw
            else:
                fields[key] = self._coercer.coerce(raw)

        logger.debug(
            "RecordBuilder: tool=%s status=%s fields=%s",
            tool, status.value, ",".join(fields) or "(none)",
        )
        return ToolResultRecord(tool=tool, status=status, title=title, fields=fields)
