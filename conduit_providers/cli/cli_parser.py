"""CLI parser construction for conduit-providers.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import (
    PROVIDER_CLI_DEFAULT_PROMPT,
    PROVIDER_CLI_DEFAULT_PROVIDER,
    PROVIDER_CLI_DISCOVERY_WAIT_SECONDS,
)

COMMANDS = ("models", "free", "status", "generate")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    No I/O or network calls occur here.
    """
    p = argparse.ArgumentParser(
        prog="conduit-providers",
        description="Load a provider by identifier and inspect its model catalog",
    )
    p.add_argument("--provider", default=PROVIDER_CLI_DEFAULT_PROVIDER, help="Provider identifier (URL, alias or import path)")
    p.add_argument("--api-key", default=None, help="API key; falls back to the environment/config file")
    p.add_argument(
        "--wait",
        type=float,
        default=PROVIDER_CLI_DISCOVERY_WAIT_SECONDS,
        help="Seconds to wait for background model discovery",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_models = sub.add_parser("models", help="List discovered models")
    p_models.add_argument("--capability", default="text-to-text")
    p_models.add_argument("--limit", type=int, default=None)

    p_free = sub.add_parser("free", help="List models priced at zero")
    p_free.add_argument("--limit", type=int, default=None)

    sub.add_parser("status", help="Show provider state, discovery report and service status")

    p_gen = sub.add_parser("generate", help="Run one text generation")
    p_gen.add_argument("--model", required=True)
    p_gen.add_argument("--prompt", default=PROVIDER_CLI_DEFAULT_PROMPT)
    p_gen.add_argument("--temperature", type=float, default=None)
    p_gen.add_argument("--max-tokens", type=int, default=None)

    return p


__all__ = ["COMMANDS", "build_parser"]
