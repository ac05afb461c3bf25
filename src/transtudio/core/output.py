"""Rendering of translation events for terminals and wire streams."""

import json
from enum import Enum
from typing import Protocol

from rich.console import Console
from rich.table import Table

from transtudio.core.cost import format_cost
from transtudio.core.translation.orchestrator import (
    FragmentEvent,
    SummaryEvent,
    TranslationEvent,
)
from transtudio.core.types import TranslationSummary


class OutputFormat(str, Enum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"


def encode_event(event: TranslationEvent) -> str:
    """Encode an event as one line of newline-delimited JSON.

    Fragments become ``{"type": "fragment", "text": ...}``; the closing summary
    becomes ``{"type": "summary", "data": {...}}`` with camelCase fields. A
    summary line is the end marker of the stream.
    """
    if isinstance(event, SummaryEvent):
        payload = {"type": event.type, "data": event.summary.to_wire()}
    else:
        payload = {"type": event.type, "text": event.text}
    return json.dumps(payload, ensure_ascii=False) + "\n"


def summary_table(summary: TranslationSummary) -> Table:
    """Build a rich table describing a completed translation."""
    table = Table(title="Translation Summary", show_header=False)
    table.add_column("Metric", style="bold blue")
    table.add_column("Value")

    table.add_row("Model", summary.model_label)
    table.add_row("Target Language", summary.target_language.label)
    table.add_row("Pages", str(summary.page_count))
    table.add_row("Input Tokens", f"{summary.input_tokens:,}")
    table.add_row("Output Tokens", f"{summary.output_tokens:,}")
    table.add_row("Cost", format_cost(summary.cost))
    table.add_row("Duration", f"{summary.duration_ms / 1000:.1f} seconds")
    return table


class EventHandler(Protocol):
    """Protocol for translation event writers."""

    def write(self, event: TranslationEvent) -> None:
        """Write one event as it arrives."""
        ...


class TextEventHandler:
    """Prints fragments as plain text, then a summary table."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def write(self, event: TranslationEvent) -> None:
        if isinstance(event, FragmentEvent):
            self.console.out(event.text, end="", highlight=False)
        else:
            self.console.print("\n")
            self.console.print(summary_table(event.summary))


class JSONEventHandler:
    """Prints every event as a JSON line."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def write(self, event: TranslationEvent) -> None:
        self.console.out(encode_event(event), end="", highlight=False)


def create_handler(format: OutputFormat, console: Console) -> EventHandler:
    """Create an event handler for the specified format.

    Raises:
        ValueError: If the format is not supported
    """
    handlers = {
        OutputFormat.TEXT: TextEventHandler,
        OutputFormat.JSON: JSONEventHandler,
    }

    handler = handlers.get(format)
    if not handler:
        raise ValueError(f"Unsupported output format: {format}")

    return handler(console)
