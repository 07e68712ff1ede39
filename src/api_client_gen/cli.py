"""CLI entry point for api-client-gen."""

from pathlib import Path

import click

from api_client_gen.config import GeneratorConfig, load_config
from api_client_gen.errors import ClientgenError
from api_client_gen.generator.client import ClientEmitter, skip_reason
from api_client_gen.generator.validator import validate_files
from api_client_gen.log import setup_logging
from api_client_gen.model.endpoint import Group, build_groups
from api_client_gen.model.types import describe_type
from api_client_gen.parser.catalog import load_catalog


def _load_groups(catalog_path: Path, config: GeneratorConfig, exclude: tuple[str, ...]) -> list[Group]:
    """Load the catalog and build endpoint models, turning library errors into CLI errors."""
    try:
        sources = load_catalog(catalog_path, exclude=[*config.exclude, *exclude])
        return build_groups(sources, config)
    except ClientgenError as e:
        raise click.ClickException(str(e)) from e


def _load_config(config_path: Path | None) -> GeneratorConfig:
    try:
        return load_config(config_path)
    except ClientgenError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False), help="Logging level (default: $API_CLIENT_GEN_LOG_LEVEL or WARNING).")
def main(log_level: str | None):
    """API Client Gen: generate a typed builder-style client from endpoint catalogs."""
    setup_logging(log_level)


@main.command()
@click.argument("catalog_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the generated client source.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Generator configuration YAML.")
@click.option("--exclude", multiple=True, help="Glob of catalog file names to skip (repeatable).")
def generate(catalog_path: Path, output: Path, config_path: Path | None, exclude: tuple[str, ...]):
    """Generate client source from an endpoint catalog."""
    config = _load_config(config_path)

    click.echo(f"Loading catalog {catalog_path}...")
    groups = _load_groups(catalog_path, config, exclude)
    total = sum(len(g.endpoints) for g in groups)
    click.echo(f"Found {len(groups)} groups, {total} endpoints.")

    source = ClientEmitter(config).generate(groups)

    errors = validate_files({output.name: source})
    if errors:
        for fname, err in errors.items():
            click.echo(f"  Validation error in {fname}: {err}")
        raise click.ClickException("generated source failed validation")

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(source, encoding="utf-8")

    skipped = sum(1 for g in groups for ep in g.endpoints if skip_reason(ep, config) is not None)
    click.echo(f"Generated {total - skipped} endpoints ({skipped} skipped) in {output}")


@main.command()
@click.argument("catalog_path", type=click.Path(exists=True, path_type=Path))
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="Generator configuration YAML.")
@click.option("--exclude", multiple=True, help="Glob of catalog file names to skip (repeatable).")
def inspect(catalog_path: Path, config_path: Path | None, exclude: tuple[str, ...]):
    """Show how each endpoint is classified without generating code."""
    config = _load_config(config_path)
    groups = _load_groups(catalog_path, config, exclude)

    for group in groups:
        click.echo(f"## {group.name}")
        for ep in group.endpoints:
            required = ", ".join(p.name for p in ep.required) or "-"
            optional = ", ".join(p.name for p in ep.optional) or "-"
            reason = skip_reason(ep, config)
            result = f"skipped: {reason}" if reason else f"returns {describe_type(ep.return_type)}"
            click.echo(f"  {ep.name}  required: {required}  optional: {optional}  {result}")
