"""Parsing of fenced ``tool-result`` blocks into typed records."""
from .blocks import BlockExtractor, BlockMarkers, Segment, TextSanitizer
from .lines import LineSyntax
from .records import RecordBuilder, WalkState
from .templates import TemplateGrouper
from .values import ValueCoercer

__all__ = [
    "BlockExtractor",
    "BlockMarkers",
    "LineSyntax",
    "RecordBuilder",
    "Segment",
    "TemplateGrouper",
    "TextSanitizer",
    "ValueCoercer",
    "WalkState",
]
