"""Command-line interface for Transtudio."""

import asyncio
import mimetypes
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from transtudio.config import get_settings
from transtudio.core.catalog import list_models
from transtudio.core.cost import format_cost
from transtudio.core.errors import NotFoundError, TranslationStudioError, UserInputError
from transtudio.core.output import OutputFormat, create_handler
from transtudio.core.service import TranslationStudio
from transtudio.utils.logging import configure_logging

app = typer.Typer(
    name="transtudio",
    help="Upload, price and stream-translate plain-text documents with LLMs",
    add_completion=False,
)
console = Console()

EXIT_CODES = {
    UserInputError: 2,
    NotFoundError: 3,
}


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        from transtudio import __version__

        console.print(f"Transtudio version: {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version information and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Set the logging level. Defaults to LOG_LEVEL or INFO.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output logs in JSON format.",
    ),
) -> None:
    """Transtudio - streaming document translation across LLM providers."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json=json_logs or settings.json_logs,
        log_file=settings.log_file,
    )


def create_studio() -> TranslationStudio:
    """Build the service used by every command."""
    return TranslationStudio(get_settings())


def fail(error: TranslationStudioError) -> NoReturn:
    """Print a caller-safe message and exit with a code for the error class."""
    console.print(f"[red]Error: {error.public_message}[/red]")
    code = next(
        (code for cls, code in EXIT_CODES.items() if isinstance(error, cls)),
        1,
    )
    raise typer.Exit(code)


@app.command()
def models() -> None:
    """List the models available for translation."""
    # IDs stay whole; Name and Context wrap on narrow terminals
    table = Table(title="Models")
    table.add_column("ID", style="bold blue", no_wrap=True)
    table.add_column("Name")
    table.add_column("Provider", no_wrap=True)
    table.add_column("Input $/M", justify="right")
    table.add_column("Output $/M", justify="right")
    table.add_column("Context")

    for model in list_models():
        table.add_row(
            model.id,
            model.label,
            model.provider,
            f"{model.input_price_per_million:g}",
            f"{model.output_price_per_million:g}",
            model.context_window or "-",
        )

    console.print(table)


@app.command()
def upload(
    input_file: Path = typer.Argument(
        ...,
        help="The plain-text file to upload.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    target_lang: Optional[str] = typer.Option(
        None,
        "--to",
        "-t",
        help="Target language code ('en' or 'zh').",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Catalog model id used for the estimate (see 'transtudio models').",
    ),
) -> None:
    """Upload a document and show its translation cost estimate."""
    studio = create_studio()
    mime_type, _ = mimetypes.guess_type(input_file.name)
    try:
        result = asyncio.run(
            studio.upload(
                input_file.read_bytes(),
                input_file.name,
                mime_type,
                target_language=target_lang,
                model_id=model,
            )
        )
    except TranslationStudioError as e:
        fail(e)

    table = Table(title="Upload", show_header=False)
    table.add_column("Metric", style="bold blue")
    table.add_column("Value")
    table.add_row("Document ID", result.document_id)
    table.add_row("Pages", str(result.page_count))
    table.add_row("Model", result.model.label)
    table.add_row("Target Language", result.target_language.label)
    table.add_row("Estimated Tokens", f"{result.estimated_tokens:,}")
    table.add_row("Estimated Cost", format_cost(result.estimated_cost))
    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]• {warning}[/yellow]")


@app.command()
def estimate(
    document_id: str = typer.Argument(..., help="Document id returned by upload."),
    model: str = typer.Option(
        ...,
        "--model",
        "-m",
        help="Catalog model id to price the document for.",
    ),
) -> None:
    """Re-estimate the cost of translating an uploaded document."""
    studio = create_studio()
    try:
        result = asyncio.run(studio.estimate(document_id, model))
    except TranslationStudioError as e:
        fail(e)

    console.print(
        f"{result.model.label}: {result.estimated_tokens:,} tokens, "
        f"{format_cost(result.estimated_cost)}"
    )
    for warning in result.warnings:
        console.print(f"[yellow]• {warning}[/yellow]")


async def _stream_translation(
    studio: TranslationStudio,
    document_id: str,
    model: str,
    target_lang: Optional[str],
    output_format: OutputFormat,
) -> None:
    run = await studio.translate(document_id, model, target_lang)
    handler = create_handler(output_format, console)
    async for event in run.stream():
        handler.write(event)


@app.command()
def translate(
    document_id: str = typer.Argument(..., help="Document id returned by upload."),
    model: str = typer.Option(
        ...,
        "--model",
        "-m",
        help="Catalog model id to translate with.",
    ),
    target_lang: Optional[str] = typer.Option(
        None,
        "--to",
        "-t",
        help="Target language code. Defaults to the language chosen at upload.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        "-F",
        help="Output format (text or json lines).",
    ),
) -> None:
    """Stream the translation of an uploaded document."""
    studio = create_studio()
    try:
        asyncio.run(
            _stream_translation(studio, document_id, model, target_lang, output_format)
        )
    except TranslationStudioError as e:
        fail(e)
    except KeyboardInterrupt:
        console.print("\n[yellow]Translation cancelled.[/yellow]")
        sys.exit(130)


@app.command()
def download(
    document_id: str = typer.Argument(..., help="Document id returned by upload."),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the translation. Defaults to its stored name.",
    ),
) -> None:
    """Save the latest translation of a document."""
    studio = create_studio()
    try:
        result = asyncio.run(studio.download(document_id))
    except TranslationStudioError as e:
        fail(e)

    target = output_file or Path(result.name)
    target.write_bytes(result.content)
    console.print(f"Saved translation to {target}")


if __name__ == "__main__":
    app()
