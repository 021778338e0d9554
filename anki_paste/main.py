# Path: anki_paste/main.py
#!/usr/bin/env python3
import logging
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing import List, NoReturn, Optional
from pathlib import Path

from anki_paste.core.config import settings
from anki_paste.core.logging_config import setup_logging
from anki_paste.core.parser import ParseError, collect_format_errors
from anki_paste.core.preferences import Preferences, resolve_preferences
from anki_paste.adapters import AnkiConnectAdapter, AnkiConnectError
from anki_paste.models.model_format import Delimiter, MODEL_FORMATS
from anki_paste.models.note import PreviewCard
from anki_paste.services.import_service import ImportService, ImportServiceError
from anki_paste.services.preview_export import export_preview
from anki_paste.services.prompt_builder import CardStyle, build_prompt

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="anki-paste",
    help="Convert pasted delimited text into Anki flashcards via AnkiConnect",
    add_completion=False,
)
console = Console()

STDIN = "-"

# --- Helpers ---

def _initialize_app(verbose: bool) -> None:
    """Common setup for all commands."""
    log_level = "DEBUG" if verbose else "INFO"
    setup_logging(log_level)
    logger.debug(f"App initialized with log level: {log_level}")

def _load_preferences() -> Preferences:
    try:
        return resolve_preferences()
    except ValueError as e:
        _fail(str(e))

def _read_source(source: str) -> str:
    if source == STDIN:
        return typer.get_text_stream("stdin").read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot read {source}: {e.strerror or e}")

def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]❌ {escape(message)}[/bold red]", highlight=False)
    raise typer.Exit(code=1)

def _render_preview(cards: List[PreviewCard]) -> None:
    table = Table(title=f"Preview ({sum(c.include_in_import for c in cards)}/{len(cards)} selected)")
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Front")
    table.add_column("Back")
    table.add_column("Tags", style="magenta")
    table.add_column("Import", justify="center")

    for card in cards:
        table.add_row(
            str(card.sequence_id),
            escape(card.front_preview),
            escape(card.back_preview),
            escape(", ".join(card.tags)),
            "✅" if card.include_in_import else "❌",
            style=None if card.include_in_import else "dim",
        )
    console.print(table)

# --- Commands ---

@app.command()
def init(
    path: Path = typer.Option(Path("."), "--path", help="Directory for anki-paste.toml"),
    deck: str = typer.Option("Default", "--deck", "-d", help="Default deck"),
    model: str = typer.Option("Básico", "--model", "-m", help="Default note type"),
    delimiter: Delimiter = typer.Option(Delimiter.SEMICOLON, "--delimiter", help="Default field delimiter"),
    verbose: bool = typer.Option(False, "--verbose", "-v")
) -> None:
    """Create an anki-paste.toml preferences file."""
    _initialize_app(verbose)
    from anki_paste.services.init_service import InitService

    if model not in MODEL_FORMATS:
        _fail(f"Unsupported note type: {model}")

    target_path = path.resolve()
    target_path.mkdir(parents=True, exist_ok=True)
    InitService(console).create_preferences(target_path, deck, model, delimiter)

@app.command()
def info(
    verbose: bool = typer.Option(False, "--verbose", "-v")
) -> None:
    """Check the AnkiConnect connection and list decks and supported note types."""
    _initialize_app(verbose)
    preferences = _load_preferences()

    console.print(f"[bold]Project:[/bold] {settings.PROJECT_NAME}")
    console.print(f"[bold]AnkiConnect:[/bold] {settings.ANKI_CONNECT_URL}")

    service = ImportService(AnkiConnectAdapter(), preferences.importer)
    try:
        data = service.load_anki_data()
    except (ConnectionError, AnkiConnectError) as e:
        logger.debug("Failed to connect to Anki", exc_info=True)
        _fail(str(e))

    console.print(f"✅ [bold green]Connected:[/bold green] AnkiConnect v{data.version}")
    console.print(f"[bold]Available Decks ({len(data.deck_names)}):[/bold]")
    for deck in data.deck_names:
        console.print(f"  - {deck}")
    console.print(f"[bold]Supported Note Types ({len(data.model_names)}):[/bold]")
    for model in data.model_names:
        console.print(f"  - {model}")

@app.command()
def models(
    delimiter: Optional[Delimiter] = typer.Option(None, "--delimiter", help="Delimiter used in the format hint")
) -> None:
    """Show the expected line format for each supported note type."""
    d = (delimiter or _load_preferences().importer.field_delimiter).value
    table = Table(title="Supported note types")
    table.add_column("Note type", style="cyan")
    table.add_column("Fields")
    table.add_column("Line format")
    for name, config in MODEL_FORMATS.items():
        table.add_row(name, config.expected_counts_label(), config.format_hint(d))
    console.print(table)

@app.command()
def parse(
    source: str = typer.Argument(..., help="Text file with one flashcard per line ('-' for stdin)"),
    deck: Optional[str] = typer.Option(None, "--deck", "-d"),
    model: Optional[str] = typer.Option(None, "--model", "-m"),
    delimiter: Optional[Delimiter] = typer.Option(None, "--delimiter"),
    all_errors: bool = typer.Option(False, "--all-errors", help="Report every malformed line, not only the first"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the preview as YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v")
) -> None:
    """Parse pasted text and show the flashcards preview."""
    _initialize_app(verbose)
    preferences = _load_preferences().importer
    text = _read_source(source)

    if all_errors:
        try:
            errors = collect_format_errors(
                text, model or preferences.default_model, delimiter or preferences.field_delimiter
            )
        except ParseError as e:
            _fail(str(e))
        if errors:
            for error in errors:
                console.print(f"[red]{escape(str(error))}[/red]", highlight=False)
            _fail(f"{len(errors)} malformed line(s).")

    service = ImportService(AnkiConnectAdapter(), preferences)
    try:
        cards = service.preview(text, deck, model, delimiter)
    except (ParseError, ImportServiceError) as e:
        _fail(f"Parsing error: {e}")

    _render_preview(cards)
    if output is not None:
        export_preview(cards, output)
        console.print(f"[green]Preview written to {output}[/green]")

@app.command("import")
def import_(
    source: str = typer.Argument(..., help="Text file with one flashcard per line ('-' for stdin)"),
    deck: Optional[str] = typer.Option(None, "--deck", "-d"),
    model: Optional[str] = typer.Option(None, "--model", "-m"),
    delimiter: Optional[Delimiter] = typer.Option(None, "--delimiter"),
    exclude: List[int] = typer.Option([], "--exclude", "-x", help="Line number to skip (repeatable)"),
    allow_duplicate: bool = typer.Option(False, "--allow-duplicate"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    verbose: bool = typer.Option(False, "--verbose", "-v")
) -> None:
    """[PUSH] Parse pasted text and add the selected flashcards to Anki."""
    _initialize_app(verbose)
    if source == STDIN and not yes:
        # stdin đã bị text chiếm, typer.confirm sẽ chỉ đọc được EOF
        _fail("Reading from stdin needs --yes (there is no way to confirm).")
    preferences = _load_preferences().importer
    text = _read_source(source)

    service = ImportService(AnkiConnectAdapter(), preferences)
    try:
        cards = service.preview(text, deck, model, delimiter)
        if exclude:
            service.exclude(cards, exclude)
    except (ParseError, ImportServiceError) as e:
        _fail(f"Parsing error: {e}")

    _render_preview(cards)

    selected = sum(card.include_in_import for card in cards)
    if not yes and not typer.confirm(f"Import {selected} flashcards into Anki?"):
        raise typer.Exit()

    try:
        result = service.import_cards(cards, allow_duplicate=allow_duplicate)
    except (ConnectionError, AnkiConnectError, ImportServiceError) as e:
        logger.debug("Import failed", exc_info=True)
        _fail(f"Import error: {e}")

    console.print(f"[bold green]✅ {escape(result.summary())}[/bold green]")
    if result.failed:
        console.print(f"[yellow]⚠️  {result.failed} flashcards were rejected by Anki.[/yellow]")

@app.command()
def prompt(
    style: CardStyle = typer.Option(CardStyle.BASIC, "--style", "-s", help="Card style"),
    delimiter: Optional[Delimiter] = typer.Option(None, "--delimiter"),
    no_tags: bool = typer.Option(False, "--no-tags", help="Do not ask for a tags column")
) -> None:
    """Print an LLM prompt that produces text in the expected format."""
    d = delimiter or _load_preferences().importer.field_delimiter
    console.print(build_prompt(style, d, include_tags=not no_tags), markup=False, highlight=False, soft_wrap=True)

def main() -> None:
    app()

if __name__ == "__main__":
    main()
