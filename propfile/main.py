"""
propfile — CLI entrypoint.

Usage:
    python -m propfile.main --help
    python -m propfile.main generate
    python -m propfile.main generate --model myapp.settings:AppConfig -o app.properties
    python -m propfile.main check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from propfile import __version__
from propfile.core.observability.logging_config import setup_logging


def _split_order(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [name.strip() for name in value.split(",") if name.strip()]


@click.group()
@click.version_option(version=__version__, prog_name="propfile")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to propfile.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """propfile — generate documented .properties files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("PROPFILE_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("PROPFILE_LOG_FILE"),
        log_file_level=os.environ.get("PROPFILE_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--model", "-m", "model_ref", default=None,
              help="Pydantic model to introspect (package.module:Class).")
@click.option("--project", "-p", default=None, help="Project name for the header.")
@click.option("--order", default=None, help="Comma-separated top-level group order.")
@click.option("--template", "template_path", type=click.Path(exists=True, dir_okay=False),
              default=None, help="File with a replacement document template.")
@click.option("--output", "-o", default=None, help="Output file, or '-' for stdout.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    model_ref: str | None,
    project: str | None,
    order: str | None,
    template_path: str | None,
    output: str | None,
    as_json: bool,
) -> None:
    """Generate a properties file from descriptors.

    Examples:

        propfile generate

        propfile generate --order Server,Database -o app.properties

        propfile generate --model myapp.settings:AppConfig -o -
    """
    from propfile.core.use_cases.generate import STDOUT, run_generate

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        model_ref=model_ref,
        project=project,
        group_order=_split_order(order),
        template_path=Path(template_path) if template_path else None,
        output=output,
    )

    if as_json:
        data = result.to_dict()
        if output == STDOUT and not result.error:
            data["content"] = result.content
        click.echo(json.dumps(data, indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if output == STDOUT:
        click.echo(result.content, nl=False)
        return

    if not ctx.obj.get("quiet"):
        assert result.generated is not None
        click.secho(f"✅ {result.output_path}", fg="green", bold=True)
        click.echo(
            f"   {result.visible_count}/{result.property_count} properties "
            f"in {result.group_count} groups ({result.generated.duration_ms} ms)"
        )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate propfile.yml."""
    from propfile.core.use_cases.config_check import check_descriptors

    result = check_descriptors(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.descriptors is not None  # guaranteed when valid
        click.secho("✅ Descriptors are valid", fg="green", bold=True)
        click.echo(f"   Project: {result.descriptors.project}")
        click.echo(f"   Properties: {len(result.descriptors.properties)}")
    else:
        click.secho("❌ Descriptor errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


@cli.command()
@click.option("--model", "-m", "model_ref", default=None,
              help="Pydantic model to introspect (package.module:Class).")
@click.option("--order", default=None, help="Comma-separated top-level group order.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def tree(ctx: click.Context, model_ref: str | None, order: str | None, as_json: bool) -> None:
    """Show the ordered group tree."""
    from propfile.core.config.loader import ConfigError
    from propfile.core.services.model_introspect import IntrospectionError
    from propfile.core.use_cases.generate import ordered_groups, resolve_descriptors

    try:
        descriptors = resolve_descriptors(
            config_path=ctx.obj.get("config_path"),
            model_ref=model_ref,
            group_order=_split_order(order),
        )
    except (ConfigError, IntrospectionError) as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    groups = ordered_groups(descriptors)

    if as_json:
        click.echo(json.dumps([g.model_dump() for g in groups], indent=2))
        return

    click.secho(f"\n📋 {descriptors.project}", fg="cyan", bold=True)

    def _show(node, indent: int) -> None:
        pad = "   " * indent
        click.echo(f"{pad}   • {node.title} ({node.count_visible()})")
        if ctx.obj.get("verbose"):
            for prop in node.visible_properties:
                click.echo(f"{pad}       {prop.name}")
        for child in node.children:
            _show(child, indent + 1)

    for group in groups:
        _show(group, 0)
    click.echo()


if __name__ == "__main__":
    cli()
