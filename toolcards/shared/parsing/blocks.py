"""Locate and remove fenced ``tool-result`` blocks in assistant text.

A block opens with the fence token immediately followed by the block
label and some whitespace, and closes at the next bare fence token.
While a response is still streaming the closing fence may not have
arrived yet; that trailing block is reported only when the text holds
no complete block at all.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from toolcards.shared.config import ParserConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """The body of one block and where it sits in the source text."""

    body: str
    start: int
    end: int
    complete: bool = True


class BlockMarkers:
    """Compiled start/end marker patterns shared by extractor and sanitizer."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        config = config or ParserConfig()
        fence = re.escape(config.fence)
        opener = fence + re.escape(config.block_label) + r"\s+"
        self.start = re.compile(opener)
        self.complete = re.compile(opener + r"(.*?)" + fence, re.DOTALL)
        self.trailing = re.compile(opener + r"(.*)\Z", re.DOTALL)


class BlockExtractor:
    def __init__(
        self,
        config: ParserConfig | None = None,
        markers: BlockMarkers | None = None,
    ) -> None:
        self._markers = markers or BlockMarkers(config)

    def segments(self, text: str) -> list[Segment]:
        """Return complete blocks in order, or the trailing partial one."""
        if not text:
            return []

        found = [
            Segment(body=m.group(1), start=m.start(), end=m.end())
            for m in self._markers.complete.finditer(text)
        ]
        if found:
            logger.debug("BlockExtractor: %d complete block(s)", len(found))
            return found

        partial = self._markers.trailing.search(text)
        if partial is None:
            return []
        logger.debug(
            "BlockExtractor: unterminated block at offset %d (%d chars so far)",
            partial.start(), len(partial.group(1)),
        )
        return [
            Segment(
                body=partial.group(1),
                start=partial.start(),
                end=partial.end(),
                complete=False,
            )
        ]

    def extract(self, text: str) -> list[str]:
        return [segment.body for segment in self.segments(text)]


class TextSanitizer:
    """Detects blocks and strips them from text meant for display."""

    def __init__(
        self,
        config: ParserConfig | None = None,
        markers: BlockMarkers | None = None,
    ) -> None:
        self._markers = markers or BlockMarkers(config)

    def has_block(self, text: str) -> bool:
        return bool(text) and self._markers.start.search(text) is not None

    def strip(self, text: str) -> str:
        if not text:
            return text
        cleaned = self._markers.complete.sub("", text)
        return self._markers.trailing.sub("", cleaned)
