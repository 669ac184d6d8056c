"""Interface Protocols split one class per module."""

from .media_provider import MediaProvider
from .module_source import ModuleSource, ProviderConstructor
from .upstream_api_client import UpstreamAPIClient

__all__ = ["MediaProvider", "ModuleSource", "ProviderConstructor", "UpstreamAPIClient"]
