"""
CLI-specific formatting functions for human-readable output.

This module handles presentation formatting for the CLI, including:
- JSON and YAML documents
- Rich tables for invoices and save types
"""

import json
from typing import Any, Dict, List

import yaml
from rich.console import Console
from rich.table import Table


def format_output(data: Any, format_type: str) -> str:
    """Format data according to the specified format type."""
    if format_type == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    elif format_type == "table":
        return format_table_output(data)
    else:
        # Default to JSON
        return json.dumps(data, indent=2, default=str)


def format_table_output(data: Any) -> str:
    """Format data as a table."""
    if isinstance(data, dict) and "invoices" in data:
        return format_invoices_table(data["invoices"])
    elif isinstance(data, dict) and "invoice" in data:
        return format_invoices_table([data["invoice"]])
    elif isinstance(data, dict) and "save_types" in data:
        return format_save_types_table(data["save_types"], data.get("default_save_type"))
    else:
        # Fallback to JSON for unknown data structures
        return json.dumps(data, indent=2, default=str)


def format_invoices_table(invoices: List[Dict[str, Any]]) -> str:
    """Format invoices as a Rich table."""
    if not invoices:
        return "No invoices found."

    table = Table(show_header=True, header_style="bold magenta", show_lines=True)
    table.add_column("ID", style="cyan", width=36)
    table.add_column("Book", style="green")
    table.add_column("Price", style="yellow", justify="right")
    table.add_column("Qty", style="yellow", justify="right")
    table.add_column("Discount", justify="right")
    table.add_column("Tax", justify="right")
    table.add_column("Total", style="bold yellow", justify="right")
    table.add_column("Save Type", style="blue")

    for invoice in invoices:
        book = invoice.get("book") or {}
        table.add_row(
            str(invoice.get("invoice_id", "N/A")),
            str(book.get("name", "N/A")),
            _money(book.get("price")),
            str(invoice.get("quantity", "N/A")),
            _percent(invoice.get("discount_rate")),
            _percent(invoice.get("tax_rate")),
            _money(invoice.get("total")),
            str(invoice.get("save_type", "N/A")),
        )

    return _render(table)


def format_save_types_table(save_types: List[str], default_save_type: Any = None) -> str:
    """Format registered save types as a Rich table."""
    if not save_types:
        return "No save types registered."

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Save Type", style="cyan")
    table.add_column("Default", style="green", justify="center")

    for save_type in save_types:
        table.add_row(save_type, "*" if save_type == default_save_type else "")

    return _render(table)


def _render(table: Table) -> str:
    # Capture Rich output as string
    console = Console(width=160, legacy_windows=False, force_terminal=False)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def _money(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:.2f}"
    return "N/A"


def _percent(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value * 100:g}%"
    return "N/A"
