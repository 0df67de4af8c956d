from .result import (
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
    value_from_json,
)
