from __future__ import annotations

import pytest

from conduit_providers.base.errors import ErrorCode, InvalidIdentifierError
from conduit_providers.base.identifiers import MAX_IDENTIFIER_LENGTH, normalize_identifier


@pytest.mark.parametrize(
    "identifier",
    [
        "openrouter",
        "https://github.com/MediaConduit/openrouter-provider",
        "conduit_providers.openrouter:OpenRouterProvider",
        "file:///opt/providers/openrouter",
        "git+ssh://git@github.com/org/repo",
    ],
)
def test_valid_identifiers_pass_through(identifier):
    assert normalize_identifier(identifier) == identifier


def test_surrounding_whitespace_is_stripped():
    assert normalize_identifier("  openrouter\n") == "openrouter"


def test_length_limit():
    assert normalize_identifier("a" * MAX_IDENTIFIER_LENGTH)
    with pytest.raises(InvalidIdentifierError):
        normalize_identifier("a" * (MAX_IDENTIFIER_LENGTH + 1))


@pytest.mark.parametrize("identifier", ["bad\x00id", "two words", "https://", "1http://host/x", "file://"])
def test_malformed_identifiers_rejected(identifier):
    with pytest.raises(InvalidIdentifierError) as ei:
        normalize_identifier(identifier)
    assert ei.value.code is ErrorCode.INVALID_IDENTIFIER


def test_non_string_rejected():
    with pytest.raises(InvalidIdentifierError):
        normalize_identifier(b"openrouter")


@pytest.mark.parametrize(
    "identifier",
    [
        "https://github.com/MediaConduit/openrouter-provider/",
        "https://github.com/MediaConduit/openrouter-provider.git",
        "https://github.com/MediaConduit/openrouter-provider.git/",
        "  https://github.com/MediaConduit/openrouter-provider//  ",
    ],
)
def test_repository_url_spellings_share_one_key(identifier):
    assert normalize_identifier(identifier) == "https://github.com/MediaConduit/openrouter-provider"


def test_suffix_only_stripped_from_urls():
    assert normalize_identifier("vendor/provider.git") == "vendor/provider.git"
    assert normalize_identifier("git+ssh://git@github.com/org/repo.git") == "git+ssh://git@github.com/org/repo"
