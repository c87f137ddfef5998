"""Tests for the command-line host."""

import pytest
from PyQt6.QtGui import QImage
from typer.testing import CliRunner

from batch_note.main import app, parse_item
from batch_note.utils.logging_config import LoggingConfig


runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr(LoggingConfig, "_initialized", True)


@pytest.fixture
def screenshot(tmp_path, make_image):
    path = tmp_path / "shot.png"
    make_image(200, 100).save(str(path), "PNG")
    return path


@pytest.mark.parametrize("item, expected", [
    ("shot.png", ("shot.png", "")),
    ("shot.png::Fix padding", ("shot.png", "Fix padding")),
    ("::Just text", (None, "Just text")),
])
def test_parse_item(item, expected):
    image_path, comment = parse_item(item)
    assert (str(image_path) if image_path else None, comment) == expected


def test_compose_writes_image(tmp_path, screenshot):
    output = tmp_path / "out" / "composite.png"
    result = runner.invoke(app, ["compose", f"{screenshot}::Header spacing", "::Looks good", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert "Composite written to" in result.stdout
    image = QImage(str(output))
    assert image.width() == 660


def test_compose_missing_image_fails(tmp_path):
    result = runner.invoke(app, ["compose", str(tmp_path / "nope.png"), "-o", str(tmp_path / "out.png")])
    assert result.exit_code == 2
    assert not (tmp_path / "out.png").exists()


def test_save_list_restore_delete(tmp_path, screenshot):
    history_dir = tmp_path / "history"
    result = runner.invoke(app, [
        "compose", f"{screenshot}::First", "::Second",
        "-o", str(tmp_path / "out.png"), "--save", "--history-dir", str(history_dir),
    ])
    assert result.exit_code == 0, result.output
    record_id = result.stdout.strip().splitlines()[-1].split()[-1]

    listed = runner.invoke(app, ["list", "--history-dir", str(history_dir)])
    assert record_id in listed.stdout
    assert "2 entries" in listed.stdout

    restored_dir = tmp_path / "restored"
    restored = runner.invoke(app, ["restore", record_id, "-o", str(restored_dir), "--history-dir", str(history_dir)])
    assert restored.exit_code == 0, restored.output
    assert (restored_dir / "entry_1.png").exists()
    assert (restored_dir / "comments.txt").read_text(encoding="utf-8") == "[1] First\n[2] Second\n"

    deleted = runner.invoke(app, ["delete", record_id, "--history-dir", str(history_dir)])
    assert deleted.exit_code == 0
    assert "No history records" in runner.invoke(app, ["list", "--history-dir", str(history_dir)]).stdout


def test_restore_unknown_record(tmp_path):
    result = runner.invoke(app, ["restore", "missing", "-o", str(tmp_path / "r"), "--history-dir", str(tmp_path / "h")])
    assert result.exit_code == 1
