"""
Output writers for scraped notes.

Files are named `jlptnotes_<LEVEL>.<ext>` inside the output directory.
"""

import csv
import json
from pathlib import Path
from typing import Union

import structlog

from .core.models import Note, MAX_EXAMPLES

logger = structlog.get_logger(__name__)


SUPPORTED_FILE_TYPES = ("csv", "json")

NOTE_COLUMNS = ["Id", "Url", "Grammar", "Reading", "Meaning", "Image"]
EXAMPLE_COLUMNS = ["ID", "Sentence", "Reading", "Meaning"]


def csv_header() -> list[str]:
    """Return the CSV header row."""
    header = list(NOTE_COLUMNS)
    for n in range(1, MAX_EXAMPLES + 1):
        header.extend(f"Example{n} {col}" for col in EXAMPLE_COLUMNS)
    return header


def output_path(level: str, file_type: str, output_dir: Union[str, Path] = ".") -> Path:
    """Build the output file path for a level."""
    return Path(output_dir) / f"jlptnotes_{level}.{file_type}"


def normalize_file_type(file_type: str) -> str:
    """
    Validate and lower-case a file type.

    Raises:
        ValueError: If the file type is not supported
    """
    normalized = (file_type or "").strip().lower()
    if normalized not in SUPPORTED_FILE_TYPES:
        raise ValueError(
            f"Invalid file type: {file_type}. Only 'csv' or 'json' are supported."
        )
    return normalized


def write_csv(notes: list[Note], level: str, output_dir: Union[str, Path] = ".") -> Path:
    """
    Save notes to CSV file.

    Args:
        notes: Notes to save
        level: JLPT level (used in the file name)
        output_dir: Directory for the file

    Returns:
        Path to saved file
    """
    filepath = output_path(level, "csv", output_dir)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(csv_header())
        for note in notes:
            writer.writerow(note.to_csv_row())

    logger.info("data_written", path=str(filepath), notes=len(notes))
    return filepath


def write_json(notes: list[Note], level: str, output_dir: Union[str, Path] = ".") -> Path:
    """
    Save notes to JSON file (array of note objects).

    Args:
        notes: Notes to save
        level: JLPT level (used in the file name)
        output_dir: Directory for the file

    Returns:
        Path to saved file
    """
    filepath = output_path(level, "json", output_dir)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    data = [note.to_dict() for note in notes]

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=1)
        f.write("\n")

    logger.info("data_written", path=str(filepath), notes=len(notes))
    return filepath


WRITERS = {
    "csv": write_csv,
    "json": write_json,
}


def export(
    notes: list[Note],
    level: str,
    file_type: str = "csv",
    output_dir: Union[str, Path] = ".",
) -> Path:
    """
    Write notes in the requested format.

    Args:
        notes: Notes to save
        level: JLPT level
        file_type: "csv" or "json" (case-insensitive)
        output_dir: Directory for the file

    Returns:
        Path to saved file

    Raises:
        ValueError: If the file type is not supported
    """
    writer = WRITERS[normalize_file_type(file_type)]
    return writer(notes, level, output_dir)
