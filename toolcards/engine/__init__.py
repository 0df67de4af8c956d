"""Toolcards engine: configuration, errors and parser entry points."""
from toolcards.shared.config import ParserConfig
from toolcards.shared.errors import ConfigError, InputError, ToolCardsError
from .yaml_config import load_yaml_config
from .parser import (
    ToolResultParser,
    default_parser,
    has_tool_result_block,
    parse_tool_results,
    strip_tool_results,
)
