"""Shared fixtures for pipeline tests."""

import json
from pathlib import Path

import pytest

from pipeline.config import Config
from schemas.build_artifact import OutputAsset, OutputChunk
from schemas.plugin_config import PluginConfig

BUNDLE_CODE = b"console.log(1)"


def write_package(root: Path, **fields) -> Path:
    path = root / "package.json"
    path.write_text(json.dumps(fields))
    return path


@pytest.fixture
def settings():
    return Config()


@pytest.fixture
def package_root(tmp_path):
    root = tmp_path / "my-source"
    root.mkdir()
    write_package(root, name="my-source", version="2.3.0", author="Jane")
    return root


@pytest.fixture
def plugin_config():
    return PluginConfig(displayName="My Source", capabilities=["video", "video"])


@pytest.fixture
def bundle():
    return {
        "main.js": OutputChunk(file_name="main.js", code=BUNDLE_CODE),
        "style.css": OutputAsset(file_name="style.css"),
    }
