#!/usr/bin/env python3
"""Example usage of the tool result parser.

This demonstrates how a chat front end can split an assistant reply into
display prose and structured result cards, re-parsing the whole reply
each time another streamed chunk arrives.
"""

from rich.console import Console
from rich.markup import escape

from toolcards import has_tool_result_block, parse_tool_results, strip_tool_results
from toolcards.shared.formatters.result_card import format_tool_result, render_card_rich

REPLY = """I checked the theatre schedule for you.

```tool-result
tool: ListRecommended
status: success
title: Recommended templates
templates:
- ROYAL PRINCE ALFRED HOSPITAL: Template A
- surgeon: Dr Smith
- session: AM
- ST VINCENT HOSPITAL
- surgeon: Dr Lee
total: 2
```

Would you like me to book one of these?"""


def example_full_reply(console: Console) -> None:
    """Example: Render a finished reply."""
    console.print("[bold]Example: finished reply[/bold]")
    console.print("=" * 60)

    if has_tool_result_block(REPLY):
        for record in parse_tool_results(REPLY):
            console.print(render_card_rich(format_tool_result(record)))
    console.print(strip_tool_results(REPLY).strip())
    console.print()


def example_streaming(console: Console, chunk_size: int = 40) -> None:
    """Example: Re-parse the accumulated text on every streamed chunk."""
    console.print("[bold]Example: streaming reply[/bold]")
    console.print("=" * 60)

    accumulated = ""
    for start in range(0, len(REPLY), chunk_size):
        accumulated += REPLY[start:start + chunk_size]
        records = parse_tool_results(accumulated)
        fields = list(records[0].fields) if records else []
        console.print(f"[dim]{len(accumulated):4d} chars[/dim] fields so far: {escape(str(fields))}")
    console.print()


if __name__ == "__main__":
    console = Console()
    example_full_reply(console)
    example_streaming(console)
