"""Root logger configuration for the CLI and the HTTP server."""

from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> None:
    """Route all ``ocflverify`` loggers through a Rich console handler.

    Idempotent: a second call only adjusts the level.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    # botocore is chatty at INFO
    logging.getLogger("botocore").setLevel(logging.WARNING)
