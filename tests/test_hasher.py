"""Tests for the artifact hasher and on-disk artifact collection."""

import hashlib

import pytest

from pipeline.errors import MissingArtifactError
from pipeline.hasher import hash_entry
from schemas.build_artifact import OutputAsset, OutputChunk, collect_artifact

from conftest import BUNDLE_CODE


class TestHashEntry:
    def test_sha256_of_entry_chunk(self, bundle):
        assert hash_entry(bundle) == hashlib.sha256(BUNDLE_CODE).hexdigest()

    def test_text_code_hashed_as_utf8(self):
        artifact = {"main.js": OutputChunk(file_name="main.js", code="console.log('é')")}
        expected = hashlib.sha256("console.log('é')".encode("utf-8")).hexdigest()
        assert hash_entry(artifact) == expected

    def test_content_only(self):
        a = {"main.js": OutputChunk(file_name="main.js", code=BUNDLE_CODE)}
        b = {
            "main.js": OutputChunk(file_name="renamed/main.js", code=BUNDLE_CODE),
            "other.js": OutputChunk(file_name="other.js", code=b"x"),
        }
        assert hash_entry(a) == hash_entry(b)

    def test_one_byte_change(self):
        a = {"main.js": OutputChunk(file_name="main.js", code=b"console.log(1)")}
        b = {"main.js": OutputChunk(file_name="main.js", code=b"console.log(2)")}
        assert hash_entry(a) != hash_entry(b)

    def test_custom_entry_filename(self):
        artifact = {"index.js": OutputChunk(file_name="index.js", code=b"x")}
        assert hash_entry(artifact, "index.js") == hashlib.sha256(b"x").hexdigest()


class TestMissingArtifact:
    def test_no_entry(self):
        with pytest.raises(MissingArtifactError) as exc:
            hash_entry({"other.js": OutputChunk(file_name="other.js", code=b"x")})
        assert "main.js" in str(exc.value)
        assert exc.value.entry_filename == "main.js"

    def test_empty_artifact(self):
        with pytest.raises(MissingArtifactError):
            hash_entry({})

    def test_entry_is_asset(self):
        with pytest.raises(MissingArtifactError):
            hash_entry({"main.js": OutputAsset(file_name="main.js")})

    def test_entry_without_code(self):
        with pytest.raises(MissingArtifactError):
            hash_entry({"main.js": OutputChunk(file_name="main.js", code=b"")})


class TestCollectArtifact:
    def test_scripts_are_chunks(self, tmp_path):
        (tmp_path / "main.js").write_bytes(BUNDLE_CODE)
        (tmp_path / "icon.png").write_bytes(b"\x89PNG")
        (tmp_path / "nested").mkdir()

        artifact = collect_artifact(tmp_path)

        assert set(artifact) == {"main.js", "icon.png"}
        assert isinstance(artifact["main.js"], OutputChunk)
        assert artifact["main.js"].content == BUNDLE_CODE
        assert isinstance(artifact["icon.png"], OutputAsset)

    def test_missing_directory(self, tmp_path):
        assert collect_artifact(tmp_path / "dist") == {}

    def test_hash_matches_in_memory_bundle(self, tmp_path, bundle):
        (tmp_path / "main.js").write_bytes(BUNDLE_CODE)
        assert hash_entry(collect_artifact(tmp_path)) == hash_entry(bundle)
