"""Main CLI entry point."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from mathconv.config import Config, latex_wrapping_from_env
from mathconv.export import ExportMode, export_document, save_to_directory
from mathconv.mixed import normalize_delimiters, render_mixed, to_plain_text
from mathconv.transpile import LatexWrapping, NotationTarget, transpile

console = Console(stderr=True)
load_dotenv()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(e: Exception) -> None:
    console.print(f"[red]Error:[/red] {e}")
    sys.exit(1)


def _load_config(**overrides) -> Config:
    try:
        return Config.from_env(**overrides)
    except RuntimeError as e:
        _fail(e)


def _read_input(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(e)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log renderer fallbacks and export steps.")
@click.version_option(package_name="mathconv")
def main(verbose):
    """Convert recognised LaTeX into other math notations, HTML and Word."""
    _configure_logging(verbose)


@main.command()
@click.argument("source")
@click.option(
    "--to", "-t", "target",
    type=click.Choice([t.value for t in NotationTarget], case_sensitive=False),
    default=NotationTarget.ASCIIMATH.value,
    show_default=True,
    help="Target notation.",
)
@click.option(
    "--wrap", "-w", "wrapping",
    type=click.Choice([w.value for w in LatexWrapping], case_sensitive=False),
    default=None,
    help="Delimiters for --to latex (defaults to MATHCONV_LATEX_WRAPPING or display).",
)
def convert(source, target, wrapping):
    """Transpile a LaTeX math SOURCE expression.

    Pass - as SOURCE to read the expression from stdin.
    """
    try:
        latex_wrapping = latex_wrapping_from_env(wrapping)
    except RuntimeError as e:
        _fail(e)
    if source == "-":
        source = click.get_text_stream("stdin").read()
    source = source.strip()

    result = transpile(source, NotationTarget(target), wrapping=latex_wrapping)
    if target == NotationTarget.MATHML and not result:
        console.print("[yellow]MathML unavailable for this expression.[/yellow]")
        sys.exit(1)
    click.echo(result)


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path. Defaults to stdout.",
)
@click.option("--plain", is_flag=True, help="Emit plain text with math and markup removed.")
@click.option(
    "--normalize/--no-normalize",
    default=True,
    show_default=True,
    help=r"Rewrite \( \) and \[ \] delimiters to $ and $$ before rendering.",
)
def render(input_path, output, plain, normalize):
    """Render a markdown document with embedded $ / $$ math to HTML."""
    text = _read_input(input_path)
    if normalize:
        text = normalize_delimiters(text)

    result = to_plain_text(text) if plain else render_mixed(text)

    if output:
        try:
            output.write_text(result, encoding="utf-8")
        except OSError as e:
            _fail(e)
        console.print(f"[green]Written to {output}[/green]")
    else:
        click.echo(result)


@main.command(name="export")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--mode", "-m",
    type=click.Choice([m.value for m in ExportMode], case_sensitive=False),
    default=ExportMode.FORMULA.value,
    show_default=True,
    help="Recognition mode; picks the title and body font.",
)
@click.option(
    "--output-dir", "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the .docx (defaults to MATHCONV_EXPORT_DIR or cwd).",
)
@click.option("--label", default=None, help="Filename prefix for the artifact.")
def export_cmd(input_path, mode, output_dir, label):
    """Export INPUT_PATH line by line to a Word document."""
    config = _load_config(export_dir_override=output_dir, label_override=label)
    content = _read_input(input_path).strip()
    try:
        config.export_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        _fail(e)

    try:
        with console.status("[cyan]Writing Word document..."):
            saved = asyncio.run(
                export_document(
                    content,
                    ExportMode(mode),
                    sink=save_to_directory(config.export_dir),
                    label=config.export_label,
                )
            )
    except Exception as e:
        _fail(e)

    console.print(f"[green]Written to {saved}[/green]")
