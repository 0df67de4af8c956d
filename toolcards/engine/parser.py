"""Entry points for turning assistant text into tool result records.

The parser keeps no state between calls: callers re-run it on the full
text every time more streamed output arrives.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from toolcards.shared.config import ParserConfig
from toolcards.shared.models.result import ToolResultRecord
from toolcards.shared.parsing import (
    BlockExtractor,
    BlockMarkers,
    LineSyntax,
    RecordBuilder,
    TemplateGrouper,
    TextSanitizer,
    ValueCoercer,
)

logger = logging.getLogger(__name__)


class ToolResultParser:
    """Wires the block extractor, record builder and sanitizer together."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        markers = BlockMarkers(self.config)
        syntax = LineSyntax(self.config)
        grouper = TemplateGrouper(self.config, syntax)
        coercer = ValueCoercer(self.config, grouper, syntax)
        self.extractor = BlockExtractor(self.config, markers)
        self.builder = RecordBuilder(self.config, coercer, syntax)
        self.sanitizer = TextSanitizer(self.config, markers)

    def parse(self, text: str) -> list[ToolResultRecord]:
        """Return one record per block in *text*, in document order."""
        records = [self.builder.build(body) for body in self.extractor.extract(text)]
        if records:
            logger.debug("ToolResultParser.parse: %d record(s)", len(records))
        return records

    def has_block(self, text: str) -> bool:
        return self.sanitizer.has_block(text)

    def strip(self, text: str) -> str:
        return self.sanitizer.strip(text)


@lru_cache(maxsize=1)
def default_parser() -> ToolResultParser:
    return ToolResultParser()


def parse_tool_results(text: str) -> list[ToolResultRecord]:
    return default_parser().parse(text)


def has_tool_result_block(text: str) -> bool:
    return default_parser().has_block(text)


def strip_tool_results(text: str) -> str:
    return default_parser().strip(text)
