"""kernel.console._protocol -- ConsoleProtocol definition.

Pure standard-library typing.Protocol for the benchdiff terminal output system.
No external dependencies allowed in this file.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """benchdiff terminal output protocol.

    Human-facing status output only; comparison reports written to stdout
    bypass the console. Both backends write to stderr.

    **General messages** -- usable from any module::

        console.info("Found 3 benchmark pairs")
        console.success("Report written")
        console.warning("Reports directory not found")
        console.error("Invalid threshold")

    **Structured output** -- tables and key-value displays::

        console.table(["Contract", "Base"], [["Token", "Token_base..."]], title="Pairs")
        console.kv({"Regressions": "2", "Improvements": "1"})
    """

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        """Informational message."""
        ...

    def success(self, message: str) -> None:
        """Success / positive-outcome message."""
        ...

    def warning(self, message: str) -> None:
        """Warning message."""
        ...

    def error(self, message: str) -> None:
        """Error message."""
        ...

    # -- Structured output --------------------------------------------------

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        """Display a table with *headers* and *rows*."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        """Display key-value pairs."""
        ...
