"""Tests for the manifest codec."""

import pytest
from ultramodmanager import Manifest
from ultramodmanager import ManifestDecodeError
from ultramodmanager import ManifestEncodeError
from ultramodmanager import decode_manifest
from ultramodmanager import encode_manifest
from ultramodmanager.codec import find_manifest
from ultramodmanager.codec import read_manifest


def test_decode_toml():
    """Decode a TOML descriptor."""
    manifest = decode_manifest(
        """
[mod]
id = "a"
name = "Mod A"
mod_version = "1.0.0"
""",
        "toml",
    )

    assert manifest.id == "a"
    assert manifest.name == "Mod A"


def test_decode_json5():
    """Decode a relaxed JSON descriptor (comments, unquoted keys, trailing commas)."""
    manifest = decode_manifest(
        """
// author notes
{
  mod: {
    id: 'a',
    mod_version: "1.0.0",
    description: "json5 mod",
  },
}
""",
        "json5",
    )

    assert manifest.id == "a"
    assert manifest.description == "json5 mod"


def test_decode_invalid_toml():
    """Malformed TOML is a decode error carrying the parser diagnostic."""
    with pytest.raises(ManifestDecodeError, match="Failed to decode toml manifest"):
        decode_manifest("[mod\nid = ", "toml")


def test_decode_invalid_json5():
    """Malformed JSON5 is a decode error."""
    with pytest.raises(ManifestDecodeError, match="Failed to decode json5 manifest"):
        decode_manifest("{mod: {", "json5")


def test_decode_json5_not_an_object():
    """Top-level JSON5 value must be an object."""
    with pytest.raises(ManifestDecodeError, match="must be a json5 table/object"):
        decode_manifest("[1, 2]", "json5")


def test_decode_missing_required_field():
    """Missing mod_version is a decode error."""
    with pytest.raises(ManifestDecodeError):
        decode_manifest('[mod]\nid = "a"\n', "toml")


def test_decode_unknown_format():
    """Unknown format is rejected."""
    with pytest.raises(ManifestDecodeError, match="Invalid manifest format"):
        decode_manifest("", "yaml")


def test_encode_unknown_format():
    """Unknown format is rejected on encode too."""
    with pytest.raises(ManifestEncodeError, match="Invalid manifest format"):
        encode_manifest(Manifest(id="a", mod_version="1.0.0"), "yaml")


@pytest.mark.parametrize("fmt", ["toml", "json5"])
def test_round_trip_preserves_every_field(fmt):
    """decode(encode(m)) == m, including empty strings."""
    manifest = Manifest(
        id="a",
        mod_version="1.0.0",
        name="",
        description='quotes " and \\ backslashes\nand newlines',
        author="ünïcode",
        source_url="",
        download_url="https://example.com/a.zip",
        checksum="",
        icon_path="icon.png",
        date="2024-01-01T00:00:00Z",
        uk_version="",
    )

    assert decode_manifest(encode_manifest(manifest, fmt), fmt) == manifest


def test_find_manifest_prefers_toml(tmp_path):
    """manifest.toml wins over manifest.json5."""
    (tmp_path / "manifest.json5").write_text("{mod: {id: 'b', mod_version: '1.0.0'}}")
    (tmp_path / "manifest.toml").write_text('[mod]\nid = "a"\nmod_version = "1.0.0"\n')

    assert find_manifest(tmp_path) == tmp_path / "manifest.toml"


def test_find_manifest_none(tmp_path):
    """No descriptor returns None."""
    (tmp_path / "readme.txt").write_text("hi")

    assert find_manifest(tmp_path) is None


def test_read_manifest_json(tmp_path):
    """manifest.json is read with the JSON5 codec."""
    path = tmp_path / "manifest.json"
    path.write_text('{"mod": {"id": "a", "mod_version": "1.0.0"}}')

    assert read_manifest(path).id == "a"


def test_read_manifest_records_path_on_error(tmp_path):
    """Decode errors carry the descriptor path in context."""
    path = tmp_path / "manifest.toml"
    path.write_text("not = = toml")

    with pytest.raises(ManifestDecodeError) as exc_info:
        read_manifest(path)

    assert exc_info.value.context["path"] == str(path)


def test_read_manifest_invalid_utf8(tmp_path):
    """Undecodable bytes are a decode error, not a crash."""
    path = tmp_path / "manifest.toml"
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(ManifestDecodeError, match="Unable to read manifest"):
        read_manifest(path)
