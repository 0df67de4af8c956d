"""Rebuild nested entities from a flattened bulleted list.

Tool output often flattens a list of records into one bullet list::

    - ROYAL PRINCE ALFRED HOSPITAL: Template A
    - surgeon: Dr Smith
    - ST VINCENT HOSPITAL
    - surgeon: Dr Lee

A bullet whose key looks like an institution name opens a new entity;
every other ``key: value`` bullet is an attribute of the open entity.
The heading test is a fuzzy classifier: all caps with at least two
words, or one of the configured keywords anywhere in the key.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from toolcards.shared.config import ParserConfig
from toolcards.shared.models.result import Entity

from .lines import LineSyntax

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class _EntityDraft:
    title: str = ""
    template: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.title and not self.attributes

    def freeze(self) -> Entity:
        return Entity(
            title=self.title, template=self.template, attributes=self.attributes,
        )


class TemplateGrouper:
    def __init__(
        self,
        config: ParserConfig | None = None,
        syntax: LineSyntax | None = None,
    ) -> None:
        config = config or ParserConfig()
        self._syntax = syntax or LineSyntax(config)
        self._keywords = [kw.upper() for kw in config.entity_keywords if kw]
        self._min_tokens = config.min_heading_tokens

    def is_heading(self, key: str) -> bool:
        """Whether a bullet's left-hand side names a new entity."""
        key = key.strip()
        if not key:
            return False
        upper = key.upper()
        if upper == key and len(key.split()) >= self._min_tokens:
            return True
        return any(keyword in upper for keyword in self._keywords)

    def group(self, raw: str) -> list[Entity]:
        entities: list[Entity] = []
        current: _EntityDraft | None = None

        for line in raw.split("\n"):
            line = line.strip()
            if not self._syntax.is_bullet(line):
                continue
            content = self._syntax.strip_bullet(line)
            key, value, has_sep = self._syntax.split(content)

            if self.is_heading(key):
                if current is not None and not current.is_empty():
                    entities.append(current.freeze())
                current = _EntityDraft(title=key)
                if has_sep and value:
                    current.template = value
                continue

            if not has_sep:
                continue
            attr = _WHITESPACE_RE.sub("", key.lower())
            if not attr:
                continue
            if current is None:
                current = _EntityDraft()
            current.attributes[attr] = value

        if current is not None and not current.is_empty():
            entities.append(current.freeze())

        logger.debug("TemplateGrouper: rebuilt %d entities", len(entities))
        return entities
