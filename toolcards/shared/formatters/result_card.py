"""Card formatting for parsed tool results.

Converts a ``ToolResultRecord`` into a small intermediate representation
(header plus typed sections) and renders that IR to Rich markup for
terminal display. Other front ends can consume the IR directly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from toolcards.shared.models.result import (
    Entity,
    ResultStatus,
    ToolResultRecord,
    Value,
    ValueKind,
)


# ── Intermediate Representation ──


@dataclass
class Section:
    """A typed content section in a result card.

    Supported kinds:
        "kv"       → content: dict[str, str]
        "list"     → content: list[str]
        "entities" → content: list[{"title": str, "template": str|None, "attributes": dict}]
        "plain"    → content: str
    """

    kind: str
    title: str = ""
    content: Any = None


@dataclass
class ResultCard:
    """Structured representation of a formatted tool result."""

    icon: str = ""
    label: str = ""
    status: str = "info"
    sections: list[Section] = field(default_factory=list)


_STATUS_ICONS = {
    ResultStatus.SUCCESS: "✓",
    ResultStatus.ERROR: "✗",
    ResultStatus.INFO: "ℹ",
}

_STATUS_COLORS = {
    "success": "green",
    "error": "red",
    "info": "cyan",
}

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

EMPTY_RESULT_TEXT = "Tool executed successfully"


def display_title(record: ToolResultRecord) -> str:
    """The record title, or the tool name split at capitals."""
    if record.title:
        return record.title
    name = record.tool or "Tool Result"
    spaced = re.sub(r"([A-Z])", r" \1", name).strip()
    return spaced[:1].upper() + spaced[1:]


def humanize_label(key: str) -> str:
    """``checkInDate`` / ``check_in_date`` → ``Check In Date``."""
    text = _CAMEL_RE.sub(" ", key.replace("_", " "))
    text = " ".join(text.split())
    return text[:1].upper() + text[1:]


def _scalar_text(value: Value) -> str:
    if value.kind is ValueKind.NULL:
        return "—"
    if value.kind is ValueKind.BOOL:
        return "Yes" if value.value else "No"
    if value.kind in (ValueKind.NUMBER, ValueKind.TEXT):
        return str(value.value)
    return _inline_text(value)


def _inline_text(value: Value) -> str:
    """Compact one-line text for values nested inside lists and objects."""
    if value.kind is ValueKind.LIST:
        return ", ".join(_inline_text(item) for item in value.items)
    if value.kind is ValueKind.OBJECT:
        return ", ".join(
            f"{humanize_label(k)}: {_inline_text(v)}" for k, v in value.entries.items()
        )
    if value.kind is ValueKind.TEMPLATE_LIST:
        return ", ".join(entity.title for entity in value.entities)
    return _scalar_text(value)


def _entity_content(entity: Entity) -> dict[str, Any]:
    return {
        "title": entity.title,
        "template": entity.template,
        "attributes": {
            humanize_label(k): v for k, v in entity.attributes.items()
        },
    }


def format_tool_result(record: ToolResultRecord) -> ResultCard:
    """Build the card IR for *record*; fields keep their source order."""
    card = ResultCard(
        icon=_STATUS_ICONS.get(record.status, ""),
        label=display_title(record),
        status=record.status.value,
    )

    scalars: dict[str, str] = {}

    def flush_scalars() -> None:
        if scalars:
            card.sections.append(Section(kind="kv", content=dict(scalars)))
            scalars.clear()

    for key, value in record.fields.items():
        label = humanize_label(key)
        if value.kind is ValueKind.LIST:
            flush_scalars()
            card.sections.append(Section(
                kind="list",
                title=label,
                content=[_inline_text(item) for item in value.items],
            ))
        elif value.kind is ValueKind.OBJECT:
            flush_scalars()
            card.sections.append(Section(
                kind="kv",
                title=label,
                content={
                    humanize_label(k): _inline_text(v)
                    for k, v in value.entries.items()
                },
            ))
        elif value.kind is ValueKind.TEMPLATE_LIST:
            flush_scalars()
            card.sections.append(Section(
                kind="entities",
                title=label,
                content=[_entity_content(e) for e in value.entities],
            ))
        else:
            scalars[label] = _scalar_text(value)
    flush_scalars()

    if not card.sections:
        card.sections.append(Section(kind="plain", content=EMPTY_RESULT_TEXT))
    return card


# ── Rich Markup Renderer ──


def _esc(text: str) -> str:
    """Escape Rich markup characters."""
    return text.replace("[", "\\[")


def render_card_rich(card: ResultCard) -> str:
    """Render a card as a Rich markup string."""
    color = _STATUS_COLORS.get(card.status, "dim")
    header_parts = []
    if card.icon:
        header_parts.append(f"[{color}]{card.icon}[/{color}]")
    header_parts.append(f"[bold {color}]{_esc(card.label)}[/bold {color}]")
    header_parts.append(f"[dim]{_esc(card.status)}[/dim]")
    lines = ["  ".join(header_parts)]

    for section in card.sections:
        if section.title:
            lines.append(f"  [bold dim]{_esc(section.title)}[/bold dim]")
        lines.extend(_render_section_rich(section))

    return "\n".join(lines)


def _render_section_rich(section: Section) -> list[str]:
    """Render a single section to Rich markup lines."""
    lines: list[str] = []

    if section.kind == "kv":
        kv = section.content or {}
        for key, value in kv.items():
            lines.append(f"  [bold]{_esc(key)}:[/bold] {_esc(str(value))}")

    elif section.kind == "list":
        items = section.content or []
        if not items:
            lines.append("  [dim]None[/dim]")
        for item in items:
            lines.append(f"  [dim]•[/dim] {_esc(str(item))}")

    elif section.kind == "entities":
        for entity in section.content or []:
            header = f"  [bold]{_esc(entity.get('title') or '(untitled)')}[/bold]"
            template = entity.get("template")
            if template:
                header += f" [yellow]\\[{_esc(template)}][/yellow]"
            lines.append(header)
            for key, value in (entity.get("attributes") or {}).items():
                lines.append(f"    [dim]│[/dim] {_esc(key)}: {_esc(str(value))}")

    elif section.kind == "plain":
        text = section.content or ""
        for text_line in str(text).splitlines()[:20]:
            lines.append(f"  [dim italic]{_esc(text_line)}[/dim italic]")

    return lines
