"""kernel.console._plain -- Plain-text backend.

print()-based output with no markup. Used when stderr is not a TTY
(CI logs, redirected output).
"""

from __future__ import annotations

import sys


def _emit(line: str = "") -> None:
    print(line, file=sys.stderr)


class PlainBackend:
    """ConsoleProtocol implementation using only built-in print()."""

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        _emit(f"  {message}")

    def success(self, message: str) -> None:
        _emit(f"  [ok] {message}")

    def warning(self, message: str) -> None:
        _emit(f"  [warn] {message}")

    def error(self, message: str) -> None:
        _emit(f"  [error] {message}")

    # -- Structured output --------------------------------------------------

    def table(self, headers: list[str], rows: list[list[str]], *, title: str = "") -> None:
        if title:
            _emit(f"\n  {title}:")

        if not headers and not rows:
            return

        # Calculate column widths
        all_rows = [headers, *rows]
        col_widths = [
            max(len(str(row[i])) if i < len(row) else 0 for row in all_rows)
            for i in range(len(headers))
        ]

        header_line = "  " + "  ".join(
            h.ljust(w) for h, w in zip(headers, col_widths, strict=True)
        )
        _emit(header_line.rstrip())
        _emit("  " + "  ".join("-" * w for w in col_widths))

        for row in rows:
            cells = [
                str(row[i]).ljust(col_widths[i]) if i < len(row) else " " * col_widths[i]
                for i in range(len(headers))
            ]
            _emit(("  " + "  ".join(cells)).rstrip())

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        if title:
            _emit(f"\n  {title}:")
        if not data:
            return
        max_key = max(len(k) for k in data)
        for k, v in data.items():
            _emit(f"  {k.rjust(max_key)}: {v}")
