"""
Export of playlist videos to CSV, JSON or plain text.
"""

import csv
import io
import json
from dataclasses import fields
from pathlib import Path
from typing import Iterable, List, Union

from tools.playlist_fetcher import VideoRecord

EXPORT_FORMATS = ("csv", "json", "txt")
CSV_HEADER = [f.name for f in fields(VideoRecord)]


class ExportError(ValueError):
    """Raised for an unsupported export format."""
    pass


def _normalize_format(output_format: str) -> str:
    normalized = (output_format or "").lower()
    if normalized not in EXPORT_FORMATS:
        raise ExportError(
            f"Unsupported export format: {output_format!r} (expected one of {', '.join(EXPORT_FORMATS)})"
        )
    return normalized


def render_csv(records: Iterable[VideoRecord]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_HEADER, lineterminator="\n")
    writer.writeheader()
    for record in records:
        writer.writerow(record.to_dict())
    return buffer.getvalue()


def render_json(records: Iterable[VideoRecord]) -> str:
    return json.dumps([record.to_dict() for record in records], indent=4, ensure_ascii=False)


def render_txt(records: Iterable[VideoRecord]) -> str:
    return "\n".join(f"{record.title} - {record.url}" for record in records)


_RENDERERS = {
    "csv": render_csv,
    "json": render_json,
    "txt": render_txt,
}


def render(records: Iterable[VideoRecord], output_format: str) -> str:
    """
    Serialize video records.

    Args:
        records: Video records in playlist order
        output_format: One of "csv", "json", "txt" (case-insensitive)

    Returns:
        The serialized text

    Raises:
        ExportError: If the format is not supported
    """
    return _RENDERERS[_normalize_format(output_format)](list(records))


def parse_json(text: str) -> List[VideoRecord]:
    """Read records back from the JSON export."""
    return [VideoRecord(**item) for item in json.loads(text)]


def default_output_filename(playlist_id: str, output_format: str) -> str:
    return f"playlist_{playlist_id}.{_normalize_format(output_format)}"


def write_export(
    records: Iterable[VideoRecord],
    output_format: str,
    output_path: Union[str, Path]
) -> Path:
    """
    Render records and write them to a UTF-8 text file.

    Returns:
        Path of the written file

    Raises:
        ExportError: If the format is not supported
        OSError: If the file cannot be written
    """
    content = render(records, output_format)
    path = Path(output_path)
    path.write_text(content, encoding="utf-8")
    return path
