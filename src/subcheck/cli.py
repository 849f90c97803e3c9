from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="subcheck", help="Manage subcheck failure report settings")

EXAMPLE_CONFIG = """\
# Failure report settings picked up by the subcheck pytest plugin.
# Point pytest at this file with --subcheck-config or the subcheck_config ini key.
indent: "    "
# type_formatter: mypackage.reporting:format_value
"""


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write subcheck.yaml in"),
):
    """Write an example subcheck.yaml config."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    target = project_dir / "subcheck.yaml"
    if target.exists():
        typer.echo(f"subcheck.yaml already exists in {dir}, skipping.")
        return

    target.write_text(EXAMPLE_CONFIG)
    typer.echo(f"Wrote config: {target}")


@app.command("check-config")
def check_config(
    config: str = typer.Argument(help="Path to subcheck YAML config"),
):
    """Validate a config file and print the effective settings."""
    from subcheck.config import load_config

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        cfg = load_config(config_path)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"indent: {cfg.indent!r}")
    typer.echo(f"type_formatter: {cfg.type_formatter or 'default'}")


@app.command()
def schema(
    out: str = typer.Option(
        "schemas/subcheck.schema.json", help="Output path for JSON Schema"
    ),
):
    """Generate JSON Schema for the subcheck YAML config."""
    from subcheck.config_schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")
