from __future__ import annotations

import pytest

from conduit_providers.base.capabilities import (
    CapabilityTag,
    capabilities_from_modalities,
    coerce_capability,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (CapabilityTag.TEXT_TO_TEXT, CapabilityTag.TEXT_TO_TEXT),
        ("text-to-text", CapabilityTag.TEXT_TO_TEXT),
        ("TEXT_TO_IMAGE", CapabilityTag.TEXT_TO_IMAGE),
        (" Image-To-Text ", CapabilityTag.IMAGE_TO_TEXT),
        ("text-to-smell", None),
        (7, None),
        (None, None),
    ],
)
def test_coerce_capability(value, expected):
    assert coerce_capability(value) is expected


def test_capabilities_from_modalities():
    caps = capabilities_from_modalities(["text", "image"], ["text"])
    assert caps == frozenset({CapabilityTag.TEXT_TO_TEXT, CapabilityTag.IMAGE_TO_TEXT})
    assert capabilities_from_modalities(["file"], ["text"]) == frozenset()
    assert capabilities_from_modalities(["Text"], ["IMAGE"]) == frozenset({CapabilityTag.TEXT_TO_IMAGE})
