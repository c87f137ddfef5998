"""
BatchNote - Command-line entry point

Headless host for the composition engine and the history store.

Usage:
    python -m batch_note.main compose shot1.png "shot2.png::Button is misaligned" "::Overall looks good" -o out.png --save
    python -m batch_note.main list
    python -m batch_note.main restore 2026-10-18_120000_000000 -o restored/
    python -m batch_note.main delete 2026-10-18_120000_000000
"""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import typer
from PyQt6.QtGui import QGuiApplication

from .config import Config
from .core.composite_service import CompositeService
from .models.entry_list import EntryList
from .services.history_service import HistoryService, HistorySaveError
from .utils.image_utils import configure_image_reader, load_image_as_qimage, save_qimage
from .utils.logging_config import LoggingConfig


COMMENT_SEPARATOR = '::'

app = typer.Typer(name="batchnote", help="Compose annotated screenshots and manage their history")


def setup_application() -> QGuiApplication:
    """
    Initialize the Qt application needed for fonts and image codecs

    Returns:
        Existing or newly created QGuiApplication
    """
    # No windows are shown, so do not require a display server
    os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

    application = QGuiApplication.instance()
    if application is None:
        application = QGuiApplication(sys.argv[:1])
        application.setApplicationName(Config.APP_NAME)
        application.setApplicationVersion(Config.APP_VERSION)
    configure_image_reader()
    return application


def _history_service(history_dir: Optional[Path], max_history: int) -> HistoryService:
    return HistoryService(history_dir=history_dir, max_history_count=max_history)


def parse_item(item: str):
    """
    Split a compose argument into (image path or None, comment).

    'shot.png' -> image, 'shot.png::text' -> image with comment,
    '::text' -> text-only entry.
    """
    path_part, _, comment = item.partition(COMMENT_SEPARATOR)
    image_path = Path(path_part) if path_part else None
    return image_path, comment


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output on the console"),
) -> None:
    """Set up logging and the Qt application before any command runs."""
    LoggingConfig.setup_logging(
        Config.get_log_dir(),
        console_level=logging.DEBUG if verbose else logging.WARNING
    )
    setup_application()


@app.command()
def compose(
    items: List[str] = typer.Argument(..., help="IMAGE, IMAGE::COMMENT or ::COMMENT, in display order"),
    output: Path = typer.Option(..., "--output", "-o", help="Where to write the composite PNG"),
    save: bool = typer.Option(False, "--save", help="Also store the composite in history"),
    history_dir: Optional[Path] = typer.Option(None, "--history-dir", help="Override history folder"),
    max_history: int = typer.Option(Config.MAX_HISTORY_COUNT, "--max-history", help="Retention cap"),
) -> None:
    """Compose entries into one image."""
    entries = EntryList()
    for item in items:
        image_path, comment = parse_item(item)
        if image_path is None:
            entries.add_text_entry(comment)
            continue

        image = load_image_as_qimage(image_path)
        if image is None:
            typer.echo(f"Could not load image: {image_path}", err=True)
            raise typer.Exit(code=2)
        entries.add_image_entry(image, comment)

    composite = CompositeService().composite(list(entries))
    if composite is None:
        typer.echo("Nothing selected to compose", err=True)
        raise typer.Exit(code=1)

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        save_qimage(composite, output)
    except OSError as e:
        typer.echo(f"Could not write {output}: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Composite written to {output} ({composite.width()}x{composite.height()})")

    if save:
        try:
            record = _history_service(history_dir, max_history).save(composite, list(entries))
        except HistorySaveError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Saved history record {record.id}")


@app.command("list")
def list_history(
    history_dir: Optional[Path] = typer.Option(None, "--history-dir", help="Override history folder"),
) -> None:
    """List history records, newest first."""
    records = _history_service(history_dir, Config.MAX_HISTORY_COUNT).get_history_list()
    if not records:
        typer.echo("No history records")
        return

    for record in records:
        typer.echo(f"{record.id}  {record.created_at:%Y-%m-%d %H:%M:%S}  {record.entry_count} entries")


@app.command()
def restore(
    record_id: str = typer.Argument(..., help="History record id"),
    output: Path = typer.Option(..., "--output", "-o", help="Folder for restored entries"),
    history_dir: Optional[Path] = typer.Option(None, "--history-dir", help="Override history folder"),
) -> None:
    """Write the entries of a record back out as images and a comments file."""
    service = _history_service(history_dir, Config.MAX_HISTORY_COUNT)
    record = service.get_record(record_id)
    if record is None:
        typer.echo(f"History record not found: {record_id}", err=True)
        raise typer.Exit(code=1)

    output.mkdir(parents=True, exist_ok=True)
    lines = []
    for entry in service.restore_entries(record):
        if entry.has_image:
            save_qimage(entry.source_image, output / f"entry_{entry.index}.png")
        lines.append(f"[{entry.index}] {entry.comment}".rstrip())

    (output / 'comments.txt').write_text('\n'.join(lines) + '\n', encoding='utf-8')
    typer.echo(f"Restored {len(lines)} entries to {output}")


@app.command()
def delete(
    record_id: str = typer.Argument(..., help="History record id"),
    history_dir: Optional[Path] = typer.Option(None, "--history-dir", help="Override history folder"),
) -> None:
    """Delete a history record."""
    if not _history_service(history_dir, Config.MAX_HISTORY_COUNT).delete(record_id):
        typer.echo(f"Could not delete history record {record_id}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Deleted {record_id}")


def main():
    """
    Main entry point for BatchNote
    """
    try:
        app()
    finally:
        LoggingConfig.shutdown()


if __name__ == "__main__":
    main()
