"""Concrete :class:`~conduit_providers.base.interfaces.ModuleSource` implementations."""

from .import_source import ImportModuleSource, split_import_path
from .static_source import StaticModuleSource

__all__ = ["ImportModuleSource", "StaticModuleSource", "split_import_path"]
