"""Command-line interface for genconstructor."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from genconstructor import __version__
from genconstructor.generator.constructor import build_rows, constructor_name, return_type
from genconstructor.generator.errors import GenerationError
from genconstructor.generator.generate import (
    DEFAULT_GENERATOR_NAME,
    PackagePlan,
    make_file_filter,
    plan_package,
    run,
)
from genconstructor.generator.gofmt import format_source, run_gofmt
from genconstructor.generator.types import ConstructorSpec, GenerationOptions
from genconstructor.generator.writers import (
    DEFAULT_OUTPUT_NAME,
    FileWriterFactory,
    StreamWriterFactory,
)
from genconstructor.golang import GoSyntaxError, TypeResolutionError, dir_to_walkers
from genconstructor.logging import configure_logging

TARGET_DIR = click.Path(exists=True, file_okay=False)


@click.group()
@click.version_option(__version__, prog_name="genconstructor")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug output")
def cli(verbose: bool) -> None:
    """Generate constructors for Go structs marked with //genconstructor."""
    configure_logging(verbose=verbose)


@cli.command()
@click.argument("target_dir", default=".", type=TARGET_DIR)
@click.option(
    "--output-name",
    default=DEFAULT_OUTPUT_NAME,
    show_default=True,
    help="Output file name, {package} is replaced by the package name",
)
@click.option(
    "--generator-name",
    default=DEFAULT_GENERATOR_NAME,
    show_default=True,
    help="Name written in the generated file header",
)
@click.option("--include-tests", is_flag=True, default=False, help="Also scan _test.go files")
@click.option("--exclude", multiple=True, metavar="GLOB", help="Skip files matching GLOB")
@click.option("--gofmt", "use_gofmt", is_flag=True, default=False, help="Format output with gofmt")
@click.option("--stdout", "to_stdout", is_flag=True, default=False, help="Write to stdout")
def gen(
    target_dir: str,
    output_name: str,
    generator_name: str,
    include_tests: bool,
    exclude: tuple[str, ...],
    use_gofmt: bool,
    to_stdout: bool,
) -> None:
    """Generate constructor files for the packages in TARGET_DIR."""
    file_filter = make_file_filter(
        include_tests=include_tests, exclude=exclude, output_name=output_name
    )
    new_writer = (
        StreamWriterFactory(sys.stdout)
        if to_stdout
        else FileWriterFactory(output_name)
    )

    try:
        run(
            target_dir,
            new_writer,
            file_filter=file_filter,
            generator_name=generator_name,
            formatter=_gofmt if use_gofmt else format_source,
        )
    except (GenerationError, GoSyntaxError, TypeResolutionError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("target_dir", default=".", type=TARGET_DIR)
@click.option("--include-tests", is_flag=True, default=False, help="Also scan _test.go files")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(target_dir: str, include_tests: bool, output_json: bool) -> None:
    """List the marked structs of TARGET_DIR and their constructors."""
    try:
        plans = [
            plan_package(walker)
            for walker in dir_to_walkers(target_dir, make_file_filter(include_tests=include_tests))
        ]
    except (GenerationError, GoSyntaxError, TypeResolutionError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if output_json:
        _output_json(plans)
    else:
        _output_plain(plans)


def _gofmt(text: str) -> str:
    return run_gofmt(format_source(text))


def _format_options(options: GenerationOptions) -> str:
    """Format options the way they are written in the marker comment."""
    flags = [
        flag
        for flag, enabled in (("-p", options.pointer), ("-s", options.super), ("-e", options.extends))
        if enabled
    ]
    return " ".join(flags)


def _format_params(spec: ConstructorSpec) -> str:
    params, _ = build_rows(spec)
    return ", ".join(f"{p.name} {p.type}" for p in params)


def _output_json(plans: list[PackagePlan]) -> None:
    """Output planned constructors as JSON."""
    data: dict = {}

    for plan in plans:
        data[plan.package.name] = {
            "path": plan.package.path,
            "imports": plan.imports.packages,
            "constructors": [
                {
                    "name": constructor_name(spec.struct_name),
                    "returns": return_type(spec),
                    **spec.to_dict(),
                }
                for spec in plan.constructors
            ],
        }

    print(json.dumps(data, indent=2))


def _output_plain(plans: list[PackagePlan]) -> None:
    """Output planned constructors using rich tables."""
    console = Console()

    if not any(plan.constructors for plan in plans):
        console.print("[dim]No marked structs found[/dim]")
        return

    for plan in plans:
        if not plan.constructors:
            continue

        title = escape(plan.package.name)
        if plan.package.path:
            title += f" [dim]({escape(plan.package.path)})[/dim]"
        console.print(f"[bold cyan]{title}[/bold cyan]")

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Constructor", style="white")
        table.add_column("Options", style="green")
        table.add_column("Returns", style="yellow")
        table.add_column("Parameters", style="dim")

        for spec in plan.constructors:
            table.add_row(
                constructor_name(spec.struct_name),
                _format_options(spec.options),
                Text(return_type(spec)),
                Text(_format_params(spec)),
            )

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
