"""Tests for the manifest record and its serialization."""

import json

import pytest

from extensions.capabilities import Capability
from extensions.manifest import ExtensionInput, Manifest, ManifestError, VersionShape


def make_manifest(**overrides):
    fields = dict(
        id="my-source",
        name="My Source",
        version="2.3.0",
        description="Movies",
        author="Jane",
        hash="abc123",
        capabilities=[Capability.VIDEO],
    )
    fields.update(overrides)
    return Manifest(**fields)


class TestInvariants:
    def test_requires_hash(self):
        with pytest.raises(ManifestError):
            make_manifest(hash="")

    def test_requires_capabilities(self):
        with pytest.raises(ManifestError):
            make_manifest(capabilities=[])

    def test_rejects_duplicate_capabilities(self):
        with pytest.raises(ManifestError):
            make_manifest(capabilities=[Capability.VIDEO, "video"])


class TestToDict:
    def test_field_order(self):
        manifest = make_manifest(
            homepage="https://x.io", note="hi", sdk_version="0.4.0"
        )
        assert list(manifest.to_dict()) == [
            "id",
            "name",
            "version",
            "description",
            "author",
            "homepage",
            "hash",
            "capabilities",
            "iconResourceName",
            "inputs",
            "note",
            "sdkVersion",
        ]

    def test_optional_fields_omitted(self):
        data = make_manifest().to_dict()
        assert "homepage" not in data
        assert "note" not in data
        assert "sdkVersion" not in data

    def test_inputs_serialized(self):
        manifest = make_manifest(inputs=[ExtensionInput(id="token", name="Token")])
        assert manifest.to_dict()["inputs"] == [
            {"id": "token", "name": "Token", "required": False}
        ]

    def test_combined_version(self):
        data = make_manifest(sdk_version="0.4.0").to_dict(VersionShape.COMBINED)
        assert data["version"] == {"extension": "2.3.0", "sdk": "0.4.0"}
        assert "sdkVersion" not in data

    def test_coded_version(self):
        data = make_manifest(sdk_version="0.4.0", version_code=7).to_dict(VersionShape.CODED)
        assert data["version"] == "2.3.0"
        assert data["versionCode"] == 7
        assert data["sdkVersion"] == "0.4.0"

    def test_plain_version_ignores_version_code(self):
        data = make_manifest(version_code=7).to_dict()
        assert "versionCode" not in data

    def test_to_json_is_indented(self):
        text = make_manifest().to_json()
        assert text.endswith("\n")
        assert json.loads(text)["id"] == "my-source"
        assert '\n  "id"' in text


class TestFromDict:
    @pytest.mark.parametrize("shape", list(VersionShape))
    def test_reads_every_version_shape(self, shape):
        original = make_manifest(sdk_version="0.4.0", version_code=3)
        loaded = Manifest.from_dict(original.to_dict(shape))
        assert loaded.version == "2.3.0"
        assert loaded.sdk_version == "0.4.0"

    def test_missing_id(self):
        with pytest.raises(ManifestError):
            Manifest.from_dict({"hash": "x", "capabilities": ["video"]})

    def test_from_json_missing_file(self, tmp_path):
        with pytest.raises(ManifestError):
            Manifest.from_json(tmp_path / "manifest.json")

    def test_from_json_invalid(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("not json")
        with pytest.raises(ManifestError):
            Manifest.from_json(path)
