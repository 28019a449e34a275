#!/usr/bin/env python3
"""
Resume PDF Rendering CLI

Renders structured resume YAML files to PDF using the rendering context.

Commands:
    render    - Render a resume YAML file to PDF
    templates - List registered templates
    fonts     - Report whether a Chinese-capable font is installed

Examples:\n

    render_pdf.py render data/jane_doe.yaml                      # Classic template, auto language

    render_pdf.py render data/jane_doe.yaml --template modern    # Two-column template

    render_pdf.py render data/jane_doe.yaml --language english   # Force English output

    render_pdf.py templates                                      # List templates
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vellum.contexts.rendering import ReportLabBackend, render_resume, resolve_font_coverage
from vellum.contexts.rendering.assembler import DEFAULT_TEMPLATE
from vellum.contexts.templating import InvalidResumeDataError, default_registry

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path.cwd()))


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Render structured resumes to PDF with pluggable templates",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume YAML file", exists=True, dir_okay=False),
    ],
    template: Annotated[
        str,
        typer.Option("--template", "-t", help="Registered template name"),
    ] = DEFAULT_TEMPLATE,
    language: Annotated[
        str,
        typer.Option(
            "--language",
            "-l",
            help="auto, english (en) or chinese (zh); english transliterates Chinese text",
        ),
    ] = "auto",
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Directory for the PDF (default: RESULTS_PATH/<date>/)",
            file_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs (font probing, page breaks)"),
    ] = False,
):
    """
    Render a resume YAML file to PDF.

    Examples:\n

        $ render_pdf.py render data/jane_doe.yaml                    # Render with defaults

        $ render_pdf.py render data/jane_doe.yaml -t minimal -l en   # Minimal, English only
    """
    typer.secho(f"\nRendering: {display_path(resume_file)}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {template}")
    typer.echo(f"Language: {language}")
    typer.echo("")

    try:
        result = render_resume(
            resume_file,
            template_name=template,
            language_mode=language,
            output_dir=output_dir,
            verbose=verbose,
        )
    except InvalidResumeDataError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.success:
        typer.secho("✓ Rendering succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {result.page_count}")
        typer.echo(f"  Size: {result.num_bytes} bytes")
        typer.echo(f"  PDF: {display_path(result.pdf_path)}")
    else:
        typer.secho("✗ Rendering failed", fg=typer.colors.RED, bold=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)

    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'render.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("templates")
def templates_command():
    """List registered templates."""
    typer.secho("\nTemplates:", fg=typer.colors.BLUE, bold=True)
    for entry in default_registry().describe():
        typer.echo(f"  {entry['name']:<10} {entry['display_name']:<10} {entry['description']}")
    typer.echo("")


@app.command("fonts")
def fonts_command():
    """Report which font Chinese text will be drawn with."""
    coverage = resolve_font_coverage(ReportLabBackend())

    if coverage.capable:
        typer.secho("\n✓ Chinese-capable font found", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Font: {coverage.font_path}")
    else:
        typer.secho("\n✗ No Chinese-capable font found", fg=typer.colors.YELLOW, bold=True)
        typer.echo(f"  Using {coverage.regular} / {coverage.bold}; auto mode will transliterate")
        typer.echo("  Set VELLUM_FONT_CANDIDATES to a .ttf/.otf file to add one")
    typer.echo("")


if __name__ == "__main__":
    app()
