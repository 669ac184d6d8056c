"""Import-path based module source.

Purpose
-------
Resolve provider identifiers to provider constructors using
``importlib.import_module``. An identifier is either:

- an alias from the alias table (short names such as ``"openrouter"`` or
  repository URLs such as
  ``"https://github.com/MediaConduit/openrouter-provider"``), or
- a direct import path of the form ``"package.module:Attribute"``.

External dependencies
---------------------
- Standard library only (``importlib``). Provider modules are imported on
  demand so nothing heavy is imported at registry construction time.

Failure modes
-------------
- ``SourceUnreachableError``: unknown URL-style identifier (no remote fetching
  is performed) or the module import failed.
- ``SourceInvalidError``: the import path is malformed, the attribute is
  missing, or the attribute is not callable.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Mapping, Optional, Tuple

from ..base.errors import SourceInvalidError, SourceUnreachableError
from ..base.identifiers import strip_source_suffix
from ..base.interfaces import ProviderConstructor
from ..base.logging import LogContext, get_logger, log_event
from ..config.defaults import PROVIDER_SOURCE_ALIASES


def split_import_path(identifier: str, path: str) -> Tuple[str, str]:
    """Split ``"package.module:Attribute"`` into its two parts.

    Raises:
        SourceInvalidError: When either part is missing.
    """
    module_path, sep, attr = path.partition(":")
    if not sep or not module_path.strip() or not attr.strip():
        raise SourceInvalidError(
            identifier, f"Expected an import path of the form 'package.module:Attribute', got '{path}'"
        )
    return module_path.strip(), attr.strip()


class ImportModuleSource:
    """Resolve identifiers through an alias table and ``importlib``.

    Parameters:
        aliases: Identifier -> import path table. Defaults to
            ``PROVIDER_SOURCE_ALIASES``; entries given here extend (and
            override) the defaults.
    """

    def __init__(self, aliases: Optional[Mapping[str, str]] = None) -> None:
        self._aliases: Dict[str, str] = dict(PROVIDER_SOURCE_ALIASES)
        if aliases:
            self._aliases.update(aliases)
        self._logger = get_logger("sources.import")

    @property
    def aliases(self) -> Dict[str, str]:
        return dict(self._aliases)

    def register_alias(self, identifier: str, import_path: str) -> None:
        """Map ``identifier`` to ``import_path`` for subsequent resolutions."""
        self._aliases[identifier] = import_path

    def _import_path_for(self, identifier: str) -> str:
        path = self._aliases.get(identifier)
        if path is None:
            path = self._aliases.get(strip_source_suffix(identifier))
        if path is not None:
            return path
        if "://" in identifier:
            raise SourceUnreachableError(identifier, f"No source registered for remote identifier '{identifier}'")
        return identifier

    def resolve(self, identifier: str) -> ProviderConstructor:
        path = self._import_path_for(identifier)
        module_path, attr = split_import_path(identifier, path)
        ctx = LogContext(identifier=identifier)
        try:
            module = import_module(module_path)
        except ImportError as exc:
            log_event(self._logger, "source.import.error", ctx, module=module_path, error=str(exc))
            raise SourceUnreachableError(identifier, f"Failed to import module '{module_path}': {exc}") from exc

        try:
            constructor = getattr(module, attr)
        except AttributeError as exc:
            raise SourceInvalidError(
                identifier, f"Provider constructor '{attr}' not found in '{module_path}'"
            ) from exc
        if not callable(constructor):
            raise SourceInvalidError(identifier, f"'{module_path}:{attr}' is not callable")
        log_event(self._logger, "source.resolved", ctx, module=module_path, attribute=attr)
        return constructor


__all__ = ["ImportModuleSource", "split_import_path"]
