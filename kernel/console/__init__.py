"""kernel.console -- status output for the benchdiff CLI.

Everything here writes to stderr so that a report sent to stdout stays
clean for redirection::

    from kernel.console import console

    console.warning("Reports directory not found")
    console.kv({"Regressions": "2"}, title="Summary")

``cli.main()`` picks the backend once with ``configure(backend="auto")``.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from kernel.console._plain import PlainBackend

if TYPE_CHECKING:
    from collections.abc import Callable

    from kernel.console._protocol import ConsoleProtocol


def _rich_backend() -> ConsoleProtocol:
    from kernel.console._rich import RichBackend

    return RichBackend()


_BACKENDS: dict[str, Callable[[], ConsoleProtocol]] = {
    "rich": _rich_backend,
    "plain": PlainBackend,
}

# Plain until configure() says otherwise; tests rely on this.
_backend: ConsoleProtocol = PlainBackend()


def configure(*, backend: str = "auto") -> ConsoleProtocol:
    """Select the console backend and return it.

    Args:
        backend: ``"rich"``, ``"plain"``, or ``"auto"`` (Rich when stderr is
            a terminal, plain in CI logs and pipes).

    Raises:
        ValueError: For an unknown backend name.
    """
    global _backend  # noqa: PLW0603

    if backend == "auto":
        backend = "rich" if sys.stderr.isatty() else "plain"

    factory = _BACKENDS.get(backend)
    if factory is None:
        msg = f"Unknown console backend: {backend!r}"
        raise ValueError(msg)
    _backend = factory()
    return _backend


def get_console() -> ConsoleProtocol:
    """Return the active backend."""
    return _backend


class _ConsoleProxy:
    """Forwards attribute access to whichever backend is active right now."""

    def __getattr__(self, name: str) -> object:
        return getattr(_backend, name)


console: ConsoleProtocol = _ConsoleProxy()  # type: ignore[assignment]
