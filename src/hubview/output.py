"""Table and JSON rendering of cluster lists.

Pure formatting: values, including the "N/A" and "Unknown" placeholders,
are written exactly as they appear in the models.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TextIO

from pydantic import BaseModel, TypeAdapter
from rich.console import Console
from rich.table import Table
from rich.text import Text

from hubview.models import CombinedClusterInfo, ManagedClusterInfo


class OutputFormat(str, Enum):
    """Output format type."""

    TABLE = "table"
    JSON = "json"


# Wide enough that URLs and messages are never wrapped
_CONSOLE_WIDTH = 512
# Spaces between table columns
_COLUMN_GAP = 3

_BASIC_COLUMNS = (
    ("NAME", "name"),
    ("STATUS", "status"),
    ("AVAILABLE", "available"),
)

_WIDE_COLUMNS = (
    ("NAME", "name"),
    ("STATUS", "status"),
    ("POWER", "power_state"),
    ("PLATFORM", "platform"),
    ("REGION", "region"),
    ("VERSION", "version"),
    ("AVAILABLE", "available"),
)

_MANAGED_LIST = TypeAdapter(list[ManagedClusterInfo])
_COMBINED_LIST = TypeAdapter(list[CombinedClusterInfo])


class OutputWriter:
    """Formats and writes cluster information."""

    def __init__(self, output_format: OutputFormat | str, stream: TextIO):
        self.format = output_format
        self.stream = stream

    def write(self, clusters: Sequence[ManagedClusterInfo]) -> None:
        """Write managed clusters in the configured format."""
        fmt = self._resolve_format()
        if fmt is OutputFormat.JSON:
            self._write_json(_MANAGED_LIST, clusters)
        else:
            self._write_table(_BASIC_COLUMNS, clusters)

    def write_combined(self, clusters: Sequence[CombinedClusterInfo], wide: bool) -> None:
        """Write combined clusters.

        ``wide`` adds the ClusterDeployment columns to table output. JSON
        output always carries every field.
        """
        fmt = self._resolve_format()
        if fmt is OutputFormat.JSON:
            self._write_json(_COMBINED_LIST, clusters)
        else:
            self._write_table(_WIDE_COLUMNS if wide else _BASIC_COLUMNS, clusters)

    def _resolve_format(self) -> OutputFormat:
        try:
            return OutputFormat(self.format)
        except ValueError:
            value = self.format.value if isinstance(self.format, Enum) else self.format
            raise ValueError(f"unsupported output format: {value}") from None

    def _write_table(
        self,
        columns: Sequence[tuple[str, str]],
        clusters: Sequence[BaseModel],
    ) -> None:
        table = Table(
            box=None,
            show_edge=False,
            pad_edge=False,
            padding=(0, _COLUMN_GAP, 0, 0),
            header_style="bold",
        )
        for header, _ in columns:
            table.add_column(header, no_wrap=True)

        for cluster in clusters:
            table.add_row(*(Text(str(getattr(cluster, field))) for _, field in columns))

        console = Console(
            file=self.stream,
            width=_CONSOLE_WIDTH,
            highlight=False,
            emoji=False,
        )
        console.print(table)

    def _write_json(self, adapter: TypeAdapter, clusters: Sequence[BaseModel]) -> None:
        data = adapter.dump_json(list(clusters), indent=2)
        self.stream.write(data.decode("utf-8"))
        self.stream.write("\n")
