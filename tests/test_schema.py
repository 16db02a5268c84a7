"""Tests for Manifest schema."""

import pytest
from pydantic import ValidationError
from ultramodmanager import Manifest


def test_from_dict_minimal():
    """Only id and mod_version are required."""
    manifest = Manifest.from_dict({"mod": {"id": "a", "mod_version": "1.0.0"}})

    assert manifest.id == "a"
    assert manifest.mod_version == "1.0.0"
    assert manifest.name == ""
    assert manifest.icon_path == ""
    assert manifest.date == ""


def test_from_dict_full():
    """All descriptor fields are carried through unvalidated."""
    manifest = Manifest.from_dict(
        {
            "mod": {
                "id": "ultratweaks",
                "name": "UltraTweaks",
                "description": "Tweaks",
                "author": "someone",
                "source_url": "not a url",
                "download_url": "https://example.com/ut.zip",
                "checksum": "deadbeef",
                "icon_path": "icon.png",
                "date": "yesterday",
                "uk_version": "16.0.0",
                "mod_version": "2.1.0",
            }
        }
    )

    assert manifest.source_url == "not a url"
    assert manifest.date == "yesterday"
    assert manifest.uk_version == "16.0.0"


def test_from_dict_missing_mod_table():
    """Error when the [mod] table is missing."""
    with pytest.raises(KeyError, match="\\[mod\\] table missing"):
        Manifest.from_dict({"id": "a", "mod_version": "1.0.0"})


def test_from_dict_missing_required_field():
    """Error when mod_version is missing."""
    with pytest.raises(ValidationError):
        Manifest.from_dict({"mod": {"id": "a"}})


def test_to_dict_wraps_mod_table():
    """to_dict nests fields under the mod table."""
    manifest = Manifest(id="a", mod_version="1.0.0")

    data = manifest.to_dict()

    assert data["mod"]["id"] == "a"
    assert data["mod"]["mod_version"] == "1.0.0"


def test_manifest_immutable():
    """Manifest is frozen."""
    manifest = Manifest(id="a", mod_version="1.0.0")

    with pytest.raises(ValidationError):
        manifest.id = "b"
