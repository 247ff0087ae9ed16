"""Path utilities for command output."""

from __future__ import annotations

from pathlib import Path

STDOUT = "-"


def resolve_output_path(output: str | None, default_filename: str) -> Path | None:
    """Where to write results; None means stdout.

    No value gives ``default_filename`` in the working directory, a
    directory gives ``default_filename`` inside it.
    """
    if output == STDOUT:
        return None
    if not output:
        return Path.cwd() / default_filename
    path = Path(output).expanduser()
    if path.is_dir():
        return path / default_filename
    return path


def write_text_output(text: str, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
