"""Teevi CLI.

Command-line interface for packaging Teevi extensions.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from cli.teevi.output import (
    configure_logging,
    console,
    print_error,
    print_info,
    print_json,
    print_manifest,
    print_success,
    print_warning,
)
from extensions.capabilities import Capability
from pipeline import __version__
from pipeline.config import Config, load_config
from pipeline.descriptor import ValidationPolicy, get_policy, read
from pipeline.errors import ManifestPipelineError
from pipeline.runner import ManifestPipeline, create_basic_manifest
from schemas.plugin_config import PluginConfig, PluginConfigError

app = typer.Typer(
    name="teevi",
    help="Teevi extension toolkit - build manifests for third-party sources",
    no_args_is_help=True,
)

# Register sub-apps
from cli.commands.capabilities import capabilities_app

app.add_typer(capabilities_app, name="capabilities")


class _State:
    config: Optional[Path] = None


state = _State()


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to teevi.toml (default: search upwards from cwd)",
    ),
) -> None:
    """Teevi extension toolkit."""
    state.config = config
    settings = load_config(config)
    configure_logging(log_level or settings.logging.level)


def _settings() -> Config:
    return load_config(state.config)


def _policy(name: Optional[str], settings: Config) -> ValidationPolicy:
    try:
        return get_policy(name or settings.manifest.policy)
    except KeyError as e:
        print_error(escape(str(e.args[0])))
        raise typer.Exit(1)


def _load_plugin_config(root: Path, settings: Config, policy: ValidationPolicy) -> PluginConfig:
    """Read teevi.yaml, falling back to package.json's displayName."""
    package = read(root / settings.manifest.descriptor_file, policy)
    return PluginConfig.from_yaml(
        root / settings.manifest.plugin_config_file,
        displayName=package.display_name,
    )


@app.command()
def build(
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Extension source root (contains package.json and teevi.yaml)",
    ),
    out_dir: Optional[Path] = typer.Option(
        None,
        "--out-dir",
        "-o",
        help="Bundler output directory (default: dist)",
    ),
    policy: Optional[str] = typer.Option(
        None,
        "--policy",
        "-p",
        help="Descriptor policy: basic|display-name|version-code",
    ),
) -> None:
    """Generate manifest.json for a built extension.

    Run after the bundler has written main.js.

    Examples:
        teevi build
        teevi build --root my-source --policy version-code
    """
    settings = _settings()
    validation_policy = _policy(policy, settings)

    try:
        plugin_config = _load_plugin_config(root, settings, validation_policy)
        pipeline = ManifestPipeline(
            plugin_config,
            root=root,
            policy=validation_policy,
            settings=settings,
        )
        manifest = pipeline.build(out_dir)
    except (ManifestPipelineError, PluginConfigError) as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    result = pipeline.last_result
    print_manifest(manifest)
    if result is not None:
        print_success(f"Manifest written to [cyan]{escape(str(result.manifest_path))}[/cyan]")
        if result.icon_path:
            print_success(f"Icon resource copied to [cyan]{escape(str(result.icon_path))}[/cyan]")
        else:
            print_info(f"[dim]No {escape(plugin_config.icon_resource_name)} found, skipped icon[/dim]")


@app.command("create-manifest")
def create_manifest(
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Directory containing package.json",
    ),
) -> None:
    """Create a basic manifest.json from package.json.

    Writes name, version, description and author only. Prefer
    'teevi build' for manifests with a bundle hash.
    """
    try:
        path = create_basic_manifest(root, settings=_settings())
    except ManifestPipelineError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    print_success(f"{path.name} has been created successfully using package.json data!")


@app.command()
def validate(
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Extension source root",
    ),
    policy: Optional[str] = typer.Option(
        None,
        "--policy",
        "-p",
        help="Descriptor policy: basic|display-name|version-code",
    ),
) -> None:
    """Check package.json and teevi.yaml without writing anything."""
    settings = _settings()
    validation_policy = _policy(policy, settings)

    try:
        plugin_config = _load_plugin_config(root, settings, validation_policy)
    except (ManifestPipelineError, PluginConfigError) as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    known = {c.value for c in Capability}
    unknown = [c for c in plugin_config.capabilities if c not in known]
    if unknown:
        print_warning(f"Capabilities passed through unchecked: {', '.join(unknown)}")
    if len(set(plugin_config.capabilities)) != len(plugin_config.capabilities):
        print_warning("Duplicate capabilities will be merged")

    icon = root / plugin_config.assets_dir / plugin_config.icon_resource_name
    if not icon.is_file():
        print_warning(f"No icon at {escape(str(icon))}")

    print_success(
        f"{escape(plugin_config.display_name)} is valid (policy: {validation_policy.name})"
    )


@app.command("bundle-options")
def bundle_options(
    root: Path = typer.Option(
        Path("."),
        "--root",
        "-r",
        help="Extension source root",
    ),
) -> None:
    """Print the configuration the bundler should use."""
    settings = _settings()
    try:
        plugin_config = _load_plugin_config(root, settings, _policy(None, settings))
    except (ManifestPipelineError, PluginConfigError) as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    print_json(ManifestPipeline(plugin_config, root=root, settings=settings).bundle_options())


@app.command()
def version() -> None:
    """Show toolkit version."""
    console.print(f"Teevi toolkit v{__version__}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
