"""
Provider deployment type.
"""
from __future__ import annotations

from enum import Enum


class ProviderType(str, Enum):
    """Where a provider's work executes."""

    LOCAL = "local"
    REMOTE = "remote"


__all__ = ["ProviderType"]
