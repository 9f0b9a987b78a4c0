"""
Command-line interface for mocksmith.

Provides generate, seed, list and info commands.
"""

from __future__ import annotations

import functools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from mocksmith import __version__
from mocksmith.config import OUTPUT_FORMATS, SEED_ENV_VAR, EngineConfig, SeedConfig
from mocksmith.errors import MocksmithError, OutputError
from mocksmith.models import GeneratorInfo, ParamType
from mocksmith.params.coercion import to_text

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def report_errors(func):
    """Print MocksmithError as ``error[kind] location: message`` and exit with its code."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except MocksmithError as exc:
            location = f" {exc.location}" if exc.location else ""
            click.echo(f"error[{exc.kind}]{location}: {exc.message}", err=True)
            sys.exit(exc.exit_code)
    return wrapper


def decode_param_value(raw: str, param_type: Optional[ParamType] = None) -> Any:
    """
    Decode JSON-looking values (lists, numbers, booleans); keep everything else as text.

    Values of declared string and select parameters are always kept verbatim.
    """
    if param_type in (ParamType.STRING, ParamType.SELECT):
        return raw
    text = raw.strip()
    if not text:
        return raw
    if text[0] in "[{" or text in ("true", "false", "null") or text[0] in "-0123456789":
        try:
            return json.loads(text)
        except ValueError:
            return raw
    return raw


def parse_params(pairs: Tuple[str, ...], info: Optional[GeneratorInfo] = None) -> Dict[str, Any]:
    """Turn ``key=value`` pairs into a parameter mapping, typed by ``info`` when given."""
    params: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--param")
        declared = info.get_parameter(key.strip()) if info is not None else None
        params[key.strip()] = decode_param_value(value, declared.type if declared else None)
    return params


def format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return to_text(value)


@click.group()
@click.version_option(version=__version__, prog_name="mocksmith")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """
    mocksmith - Deterministic mock data generation

    Generate single values from a catalog of producers, or seed whole
    relational schemas to CSV, JSON or SQL files.
    """
    setup_logging(verbose)


@cli.command()
@click.argument("industry")
@click.argument("name")
@click.option("-p", "--param", "param_pairs", multiple=True, help="Producer parameter as key=value")
@click.option("--seed", type=int, envvar=SEED_ENV_VAR, default=None, help="Random seed")
@click.option("-n", "--count", type=int, default=1, show_default=True, help="Number of values")
@click.option("--workers", type=int, default=1, show_default=True, help="Parallel workers")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write values to this file instead of stdout",
)
@click.option(
    "-f",
    "--output-format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="One value per line, or a JSON array",
)
@report_errors
def generate(
    industry: str,
    name: str,
    param_pairs: Tuple[str, ...],
    seed: Optional[int],
    count: int,
    workers: int,
    output: Optional[Path],
    output_format: str,
) -> None:
    """
    Generate values from one producer.

    Examples:

        mocksmith generate base uuid -n 5 --seed 42

        mocksmith generate base number -p min=1 -p max=10

        mocksmith generate base enum -p 'values=["a","b"]' -f json
    """
    from mocksmith.engine import build_engine, generate_many

    engine = build_engine(EngineConfig(seed=seed))
    params = parse_params(param_pairs, engine.info(industry, name))
    values = generate_many(engine, industry, name, params, count=count, workers=workers)

    if output_format == "json":
        text = json.dumps(values, indent=2, sort_keys=True, default=str) + "\n"
    else:
        text = "".join(format_value(v) + "\n" for v in values)

    if output is None:
        click.echo(text, nl=False)
        return

    try:
        output.write_text(text)
    except OSError as exc:
        raise OutputError(f"cannot write {output}: {exc}") from exc
    console.print(f"[green]Wrote {len(values)} values to {output}[/green]")


@cli.command()
@click.argument("schema_path", metavar="SCHEMA", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--out",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    help="Output directory",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS)),
    default="csv",
    show_default=True,
    help="Output file format",
)
@click.option("--seed", type=int, envvar=SEED_ENV_VAR, default=None, help="Random seed for reproducibility")
@click.option("--run-id", type=str, default=None, help="Write into a run-specific subdirectory")
@click.option("--batch-size", type=int, default=1000, show_default=True, help="CSV rows per flush")
@click.option("--no-manifest", is_flag=True, help="Skip manifest.json")
@click.option("--no-progress", is_flag=True, help="Hide the progress bar")
@report_errors
def seed(
    schema_path: Path,
    output_dir: Path,
    output_format: str,
    seed: Optional[int],
    run_id: Optional[str],
    batch_size: int,
    no_manifest: bool,
    no_progress: bool,
) -> None:
    """
    Seed every table of a schema file.

    Examples:

        mocksmith seed schema.yaml --out output --format csv --seed 7

        mocksmith seed schema.yaml --out output --format sql --run-id nightly
    """
    from mocksmith.engine import build_engine
    from mocksmith.schema import load_schema
    from mocksmith.seeder import Seeder

    console.print("[bold blue]mocksmith seed[/bold blue]")
    console.print(f"Schema: {schema_path}")

    schema = load_schema(schema_path)
    engine = build_engine(EngineConfig(seed=seed))
    config = SeedConfig(
        output_dir=output_dir,
        output_format=output_format,
        seed=seed,
        run_id=run_id,
        schema_path=schema_path,
        batch_size=batch_size,
        write_manifest=not no_manifest,
    )

    seeder = Seeder(engine, config, show_progress=not no_progress)
    report = seeder.run(schema)
    report.save(seeder.writer.get_output_dir())

    table = Table(title="Seeded Tables")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", style="green", justify="right")
    table.add_column("Columns", style="yellow", justify="right")
    table.add_column("File", style="magenta")

    for tbl_name, stats in report.tables.items():
        table.add_row(tbl_name, f"{stats['rows']:,}", str(len(stats["columns"])), Path(stats["file"]).name)

    console.print(table)
    console.print(f"Output directory: {seeder.writer.get_output_dir()}")
    console.print(f"Seed: {engine.seed}")

    score = report.integrity_score
    if score == 1.0:
        console.print(f"[green]Referential Integrity: {score:.0%}[/green]")
    else:
        console.print(f"[yellow]Referential Integrity: {score:.0%}[/yellow]")
        console.print("See report.json for details on violations.")


@cli.command(name="list")
@click.argument("industry", required=False)
@report_errors
def list_generators(industry: Optional[str]) -> None:
    """
    List industries, or the generators of one industry.

    Examples:

        mocksmith list

        mocksmith list aviation
    """
    from mocksmith.engine import build_engine

    engine = build_engine()
    catalog = engine.catalog()

    if industry is None:
        table = Table(title="Industries")
        table.add_column("Industry", style="cyan")
        table.add_column("Generators", style="green", justify="right")
        for name in engine.list_industries():
            table.add_row(name, str(len(catalog.get(name, {}))))
        console.print(table)
        return

    names: List[str] = engine.list_generators(industry)
    table = Table(title=f"Generators in {industry}")
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="green")
    table.add_column("Example", style="yellow")
    for name in names:
        info = catalog[industry][name]
        example = "" if info.example is None else format_value(info.example)
        table.add_row(name, info.description, Text(example))
    console.print(table)


@cli.command()
@click.argument("industry")
@click.argument("name")
@report_errors
def info(industry: str, name: str) -> None:
    """
    Display a generator's parameters.

    Example:

        mocksmith info base password
    """
    from mocksmith.engine import build_engine

    engine = build_engine()
    gen_info = engine.info(industry, name)

    console.print(f"[bold blue]{industry}/{name}[/bold blue]")
    if gen_info.description:
        console.print(gen_info.description)
    if gen_info.example is not None:
        console.print(f"Example: {format_value(gen_info.example)}", markup=False)

    if not gen_info.parameters:
        console.print("No parameters.")
        return

    table = Table(title="Parameters")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Required", style="yellow")
    table.add_column("Default")
    table.add_column("Constraints", style="magenta")
    table.add_column("Description")

    for param in gen_info.parameters:
        constraints = []
        if param.min is not None:
            constraints.append(f"min={param.min}")
        if param.max is not None:
            constraints.append(f"max={param.max}")
        if param.options:
            constraints.append("options=" + "|".join(param.options))
        default = "" if param.default is None else format_value(param.default)
        table.add_row(
            param.name,
            param.type.value,
            "yes" if param.required else "no",
            Text(default),
            ", ".join(constraints),
            param.description,
        )

    console.print(table)


if __name__ == "__main__":
    cli()
