"""Terminal display of collected records using Rich tables."""

from __future__ import annotations

from typing import Iterable, List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from zfsstats.interfaces.accumulator import MetricRecord


def format_tags(tags: dict) -> str:
    """Render tags as ``key=value`` pairs sorted by key."""
    return " ".join(f"{k}={v}" for k, v in sorted(tags.items()))


def build_record_table(record: MetricRecord) -> Table:
    """Build a two column table of a record's fields, sorted by name."""
    title = record.measurement
    tag_str = format_tags(record.tags)
    if tag_str:
        title = f"{title} [{tag_str}]"

    # Text keeps tag values such as [pool=tank] out of markup parsing
    table = Table(title=Text(title), title_justify="left")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")
    for key in sorted(record.fields):
        table.add_row(Text(key), str(record.fields[key]))
    return table


def render_records(records: Iterable[MetricRecord], console: Optional[Console] = None) -> List[Table]:
    """Print one table per record and return the tables.

    Args:
        records: Records to print.
        console: Console to print to. Defaults to stdout.

    Returns:
        The tables in print order.
    """
    console = console or Console()
    tables = []
    for record in records:
        table = build_record_table(record)
        console.print(table)
        tables.append(table)
    if not tables:
        console.print("No records collected.")
    return tables
