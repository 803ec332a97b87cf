"""Spreadsheet parsing.

Turns the raw text of the episode spreadsheet (comma-delimited, double-quote
escaped) into row records keyed by header name.

The scanner works character by character over the whole file:
- a comma separates fields only outside quotes
- a newline ends a row only outside quotes
- ``""`` inside a quoted field is a literal quote
- every field is trimmed

A quote that is never closed swallows the rest of the file into one field;
malformed input is not repaired.
"""

import re
from pathlib import Path

from catalog_ingest.core.exceptions import SpreadsheetError
from catalog_ingest.core.logging import get_logger
from catalog_ingest.core.types import SpreadsheetRecord

logger = get_logger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def split_rows(text: str) -> list[list[str]]:
    """Split delimited text into rows of trimmed field values.

    Blank rows are dropped.

    Args:
        text: Raw file content

    Returns:
        Field values per row, in file order
    """
    rows: list[list[str]] = []
    row: list[str] = []
    current: list[str] = []
    in_quotes = False

    def end_field() -> None:
        row.append("".join(current).strip())
        current.clear()

    def end_row() -> None:
        nonlocal row
        end_field()
        if any(row) or len(row) > 1:
            rows.append(row)
        row = []

    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == '"':
            if in_quotes and i + 1 < length and text[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            end_field()
        elif char == "\n" and not in_quotes:
            end_row()
        else:
            current.append(char)
        i += 1

    if current or row:
        end_row()

    return rows


def parse_spreadsheet(text: str, required_column: str = "Channel Name") -> list[SpreadsheetRecord]:
    """Parse spreadsheet text into records keyed by header name.

    The first row is the header. Cells missing from short rows read as an
    empty string. Rows whose ``required_column`` is empty are not data rows
    and are dropped.

    Args:
        text: Raw file content
        required_column: Column that must be non-empty for a row to count

    Returns:
        Records in spreadsheet order
    """
    rows = split_rows(text)
    if not rows:
        return []

    headers = rows[0]
    records: list[SpreadsheetRecord] = []
    for values in rows[1:]:
        record = {
            header: values[index] if index < len(values) else ""
            for index, header in enumerate(headers)
        }
        if record.get(required_column, "").strip():
            records.append(record)

    return records


def read_spreadsheet(path: Path, required_column: str = "Channel Name") -> list[SpreadsheetRecord]:
    """Read and parse the spreadsheet file.

    Args:
        path: Spreadsheet path
        required_column: Column that must be non-empty for a row to count

    Returns:
        Parsed records

    Raises:
        SpreadsheetError: If the file is missing, unreadable, or has no data rows
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise SpreadsheetError(f"Spreadsheet not found: {path}", path=str(path)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SpreadsheetError(f"Spreadsheet unreadable: {e}", path=str(path)) from e

    records = parse_spreadsheet(text, required_column=required_column)
    if not records:
        raise SpreadsheetError("Spreadsheet has no data rows", path=str(path))

    logger.info("Parsed spreadsheet", path=str(path), records=len(records))
    return records


def parse_int(value: str | None, default: int) -> int:
    """Parse the leading integer of a cell value.

    ``" 3x"`` parses as 3. Unparsable values and zero fall back to
    ``default``.

    Args:
        value: Cell value
        default: Fallback value

    Returns:
        Parsed integer or default
    """
    match = _LEADING_INT.match(value or "")
    if not match:
        return default
    return int(match.group(1)) or default


def parse_tags(value: str | None) -> list[str]:
    """Split a comma-separated tag cell, dropping empty entries."""
    if not value:
        return []
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def parse_bool(value: str | None) -> bool:
    """Interpret a spreadsheet flag; only ``true`` (any case) is truthy."""
    return (value or "").strip().lower() == "true"


__all__ = [
    "parse_bool",
    "parse_int",
    "parse_spreadsheet",
    "parse_tags",
    "read_spreadsheet",
    "split_rows",
]
