"""Data loader for the comma-delimited site CSV.

This module turns the raw input document (one row per site) into ordered row
mappings. The parser is a single left-to-right scan that understands quoted
fields, doubled-quote escapes and newlines embedded in quoted values, which is
how product descriptions and blog bodies arrive from spreadsheet exports.

No rendering or file output happens here. Fatal input problems are raised as
``UserInputError`` / ``DataValidationError`` from ``storefront.exceptions`` so
the batch driver can abort before any site is written.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from storefront.config import DOMAIN_COLUMN
from storefront.exceptions import DataValidationError, UserInputError

QUOTE = '"'
FIELD_SEPARATOR = ","


def _is_blank_record(fields: list[str]) -> bool:
    return not any(field.strip() for field in fields)


def parse_csv_records(csv_text: str) -> list[list[str]]:
    r"""Split CSV text into records of raw field strings.

    Parameters
    ----------
    csv_text : str
        Full document text.

    Returns
    -------
    list[list[str]]
        Retained records in input order. Records whose fields are all blank
        (including the empty record left by a trailing newline) are dropped.

    Notes
    -----
    Inside a quoted field, ``""`` produces a literal quote and separators are
    literal. Outside quotes, ``,`` ends a field and ``\n``, ``\r`` or
    ``\r\n`` ends a record.

    Examples
    --------
    >>> parse_csv_records('a,b\n"x, y","He said ""hi"" twice"\n')
    [['a', 'b'], ['x, y', 'He said "hi" twice']]
    """
    records: list[list[str]] = []
    fields: list[str] = []
    field_chars: list[str] = []
    in_quotes = False
    index = 0
    length = len(csv_text)

    while index < length:
        char = csv_text[index]
        if in_quotes:
            if char == QUOTE:
                if index + 1 < length and csv_text[index + 1] == QUOTE:
                    field_chars.append(QUOTE)
                    index += 1
                else:
                    in_quotes = False
            else:
                field_chars.append(char)
        elif char == QUOTE:
            in_quotes = True
        elif char == FIELD_SEPARATOR:
            fields.append("".join(field_chars))
            field_chars = []
        elif char in "\r\n":
            if char == "\r" and index + 1 < length and csv_text[index + 1] == "\n":
                index += 1
            fields.append("".join(field_chars))
            if not _is_blank_record(fields):
                records.append(fields)
            fields = []
            field_chars = []
        else:
            field_chars.append(char)
        index += 1

    fields.append("".join(field_chars))
    if not _is_blank_record(fields):
        records.append(fields)
    return records


def parse_csv_rows(csv_text: str) -> list[dict[str, str]]:
    """Parse CSV text into header-keyed row mappings.

    The first retained record is the header. Every data record is mapped
    positionally onto the trimmed header names: missing trailing values become
    ``""`` and surplus values are discarded.

    Parameters
    ----------
    csv_text : str
        Full document text.

    Returns
    -------
    list[dict[str, str]]
        One trimmed mapping per data record.

    Raises
    ------
    DataValidationError
        If fewer than two records (header plus one data row) are present.
    """
    records = parse_csv_records(csv_text)
    if len(records) < 2:
        raise DataValidationError(
            "CSV must have at least a header row and one data row.",
            context={"records": len(records)},
        )
    headers = [header.strip() for header in records[0]]
    rows: list[dict[str, str]] = []
    for record in records[1:]:
        row = {
            header: (record[position] if position < len(record) else "").strip()
            for position, header in enumerate(headers)
        }
        rows.append(row)
    return rows


def load_site_rows_from_csv(csv_path: Path) -> list[dict[str, str]]:
    """Read and parse the site CSV at ``csv_path``.

    Parameters
    ----------
    csv_path : Path
        UTF-8 encoded CSV (a leading BOM is tolerated).

    Returns
    -------
    list[dict[str, str]]
        Parsed rows.

    Raises
    ------
    UserInputError
        If the file does not exist.
    DataValidationError
        If the document is not valid UTF-8 or has no data rows.
    """
    csv_path = Path(csv_path)
    if not csv_path.is_file():
        raise UserInputError(
            f"CSV file not found: {csv_path}", context={"csv_path": str(csv_path)}
        )
    try:
        with csv_path.open("r", encoding="utf-8-sig", newline="") as csvfile:
            csv_text = csvfile.read()
    except UnicodeDecodeError as exc:
        raise DataValidationError(
            f"CSV file is not valid UTF-8: {csv_path} ({exc.reason} at byte {exc.start})",
            context={"csv_path": str(csv_path)},
        ) from exc
    return parse_csv_rows(csv_text)


def filter_rows_by_domain(
    rows: list[dict[str, str]], domain: str | None
) -> list[dict[str, str]]:
    """Restrict ``rows`` to those whose domain equals ``domain`` exactly.

    A ``None`` or empty filter returns ``rows`` unchanged.

    Raises
    ------
    UserInputError
        If a filter is given and no row matches it.
    """
    if not domain:
        return rows
    selected = [row for row in rows if row.get(DOMAIN_COLUMN, "") == domain]
    if not selected:
        raise UserInputError(
            f"No rows found for domain: {domain}", context={"domain": domain}
        )
    return selected


def get_value_from_row(row: Mapping[str, str], column_key: str, default: str = "") -> str:
    """Return the trimmed value for ``column_key`` or ``default`` when empty.

    Examples
    --------
    >>> get_value_from_row({'x': ' 1 '}, 'x')
    '1'
    >>> get_value_from_row({'x': ''}, 'x', 'fallback')
    'fallback'
    """
    value = row.get(column_key)
    if value is None:
        return default
    str_value = str(value).strip()
    return str_value or default
