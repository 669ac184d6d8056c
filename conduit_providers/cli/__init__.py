"""conduit-providers CLI (package entrypoint).

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Any, Optional

from .cli_actions import run
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None, registry: Any = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    registry: Any
        Registry to load providers from; defaults to ``create_registry()``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    if registry is None:
        from .. import create_registry

        registry = create_registry()
    return run(registry, args)


__all__ = ["main"]
