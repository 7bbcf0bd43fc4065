"""The bundled example project builds with its own configuration."""

import json
import shutil
from pathlib import Path

from pipeline.config import load_config
from pipeline.descriptor import get_policy
from pipeline.runner import ManifestPipeline
from schemas.plugin_config import PluginConfig

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "hello-source"


def test_example_builds(tmp_path):
    root = tmp_path / "hello-source"
    shutil.copytree(EXAMPLE, root)
    (root / "dist").mkdir()
    (root / "dist" / "main.js").write_text("var teevi=function(){return{}}();")

    settings = load_config(root / "teevi.toml")
    config = PluginConfig.from_yaml(root / "teevi.yaml")
    pipeline = ManifestPipeline(
        config,
        root=root,
        policy=get_policy(settings.manifest.policy),
        sdk_version="0.4.0",
        settings=settings,
    )
    pipeline.build()

    data = json.loads((root / "dist" / "manifest.json").read_text())
    assert data["id"] == "hello-source"
    assert data["name"] == "Hello Source"
    assert data["author"] == "Teevi Developers"
    assert data["versionCode"] == 3
    assert data["capabilities"] == ["metadata", "video"]
    assert data["inputs"] == [{"id": "region", "name": "Region", "required": False}]
