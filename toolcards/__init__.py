"""Toolcards: parse fenced tool-result blocks out of assistant text."""
from .engine import (
    ConfigError,
    InputError,
    ParserConfig,
    ToolCardsError,
    ToolResultParser,
    has_tool_result_block,
    load_yaml_config,
    parse_tool_results,
    strip_tool_results,
)
from .shared.models.result import (
    BoolValue,
    Entity,
    ListValue,
    NullValue,
    NumberValue,
    ObjectValue,
    ResultStatus,
    TemplateListValue,
    TextValue,
    ToolResultRecord,
    Value,
    ValueKind,
)

__version__ = "0.1.0"
