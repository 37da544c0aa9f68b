from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from tfstate_to_hcl.converter import StateConverter
from tfstate_to_hcl.exclusions import ExclusionRules
from tfstate_to_hcl.models import ConvertConfig, LabelPolicy, ModuleGrouping
from tfstate_to_hcl.parser import GeneratedHclError, GeneratedHclReader
from tfstate_to_hcl.version import __version__

app = typer.Typer(
    name="tfstate-to-hcl",
    help="Generate Terraform resource blocks from existing state files",
    no_args_is_help=True,
)
console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def version_callback(value: bool) -> None:
    if value:
        console.print(f"tfstate-to-hcl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = False,
) -> None:
    pass


@app.command()
def convert(
    input_dir: Annotated[
        Path,
        typer.Argument(help="Directory containing *.tfstate files"),
    ] = Path("."),
    output_dir: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output directory for generated .tf files"),
    ] = Path("output"),
    label_policy: Annotated[
        LabelPolicy,
        typer.Option("--label-policy", help="Label for indexed instances: composite or index-key"),
    ] = LabelPolicy.COMPOSITE,
    split_modules: Annotated[
        bool,
        typer.Option("--split-modules", help="Write one file per module instead of per state file"),
    ] = False,
    exclude: Annotated[
        list[str] | None,
        typer.Option("--exclude", help="Additional attribute name to drop"),
    ] = None,
    exclude_prefix: Annotated[
        list[str] | None,
        typer.Option("--exclude-prefix", help="Additional attribute name prefix to drop"),
    ] = None,
    no_format: Annotated[
        bool,
        typer.Option("--no-format", help="Skip running terraform fmt on the output"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """Convert Terraform state files into resource blocks."""
    configure_logging(verbose)

    config = ConvertConfig(
        input_dir=input_dir,
        output_dir=output_dir,
        label_policy=label_policy,
        module_grouping=ModuleGrouping.PER_MODULE if split_modules else ModuleGrouping.LAST_MODULE,
        exclusions=ExclusionRules().extended(exclude or [], exclude_prefix or []),
        run_formatter=not no_format,
    )

    console.print(
        Panel(
            f"[bold blue]tfstate-to-hcl[/]\nInput: {input_dir}\nOutput: {output_dir}",
            title="Conversion",
        )
    )

    converter = StateConverter(config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Rendering resource blocks...", total=None)
        result = converter.run()

    if not result.success:
        console.print("\n[red]✗ Conversion failed[/]")
        for error in result.errors:
            console.print(f"  [red]•[/] {error}")
        sys.exit(1)

    console.print(f"\n[green]✓[/] Rendered {result.instances_rendered} resource instances")
    for path in result.files_written:
        console.print(f"[green]✓[/] Wrote {path}")
        if verbose:
            console.print(path.read_text(encoding="utf-8"), markup=False, highlight=False, soft_wrap=True)

    if result.warnings:
        console.print("\n[yellow]Warnings:[/]")
        for warning in result.warnings:
            console.print(f"  • {warning}")


@app.command()
def check(
    output_dir: Annotated[
        Path,
        typer.Argument(help="Directory containing generated .tf files"),
    ] = Path("output"),
) -> None:
    """List the resource addresses declared in generated files."""
    if not output_dir.exists():
        console.print(f"[red]Error: Output directory does not exist: {output_dir}[/]")
        sys.exit(1)

    reader = GeneratedHclReader()
    failures = 0

    for path in sorted(output_dir.glob("*.tf")):
        try:
            addresses = reader.read_resource_addresses(path)
        except GeneratedHclError as e:
            failures += 1
            console.print(f"[red]✗[/] {e}")
            continue

        console.print(f"[green]✓[/] {path.name}: {len(addresses)} resources")
        for address in addresses:
            console.print(f"  • {address}")

    if failures:
        console.print(f"\n[red]{failures} file(s) could not be parsed[/]")
        sys.exit(1)


if __name__ == "__main__":
    app()
