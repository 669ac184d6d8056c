from __future__ import annotations

import pytest

from conduit_providers.base.errors import SourceInvalidError, SourceUnreachableError
from conduit_providers.openrouter import OpenRouterProvider
from conduit_providers.sources import ImportModuleSource, StaticModuleSource, split_import_path


def test_alias_resolves_repository_url_and_short_name():
    source = ImportModuleSource()
    assert source.resolve("https://github.com/MediaConduit/openrouter-provider") is OpenRouterProvider
    assert source.resolve("https://github.com/MediaConduit/openrouter-provider.git") is OpenRouterProvider
    assert source.resolve("openrouter") is OpenRouterProvider


def test_direct_import_path():
    source = ImportModuleSource()
    assert source.resolve("conduit_providers.openrouter.provider:OpenRouterProvider") is OpenRouterProvider


def test_extra_aliases_extend_defaults():
    source = ImportModuleSource({"local-openrouter": "conduit_providers.openrouter:OpenRouterProvider"})
    assert source.resolve("local-openrouter") is OpenRouterProvider
    assert "openrouter" in source.aliases


def test_unknown_remote_identifier_is_unreachable():
    with pytest.raises(SourceUnreachableError):
        ImportModuleSource().resolve("https://github.com/someone/else")


def test_missing_module_is_unreachable():
    with pytest.raises(SourceUnreachableError):
        ImportModuleSource().resolve("conduit_providers.does_not_exist:Provider")


def test_missing_or_non_callable_attribute_is_invalid():
    source = ImportModuleSource()
    with pytest.raises(SourceInvalidError):
        source.resolve("conduit_providers.openrouter:NoSuchProvider")
    with pytest.raises(SourceInvalidError):
        source.resolve("conduit_providers.openrouter:OPTIMISTIC_MODEL_RESOLUTION")


def test_malformed_import_path_is_invalid():
    with pytest.raises(SourceInvalidError):
        split_import_path("x", "conduit_providers.openrouter")
    with pytest.raises(SourceInvalidError):
        ImportModuleSource().resolve("just-a-name")


def test_static_source_register_and_resolve():
    source = StaticModuleSource()
    source.register("local", OpenRouterProvider)
    assert source.resolve("local") is OpenRouterProvider
    source.unregister("local")
    with pytest.raises(SourceUnreachableError):
        source.resolve("local")
    with pytest.raises(SourceInvalidError):
        source.register("bad", "not callable")  # type: ignore[arg-type]
