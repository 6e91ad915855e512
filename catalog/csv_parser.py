"""
Lenient CSV parsing for collection exports.

The collection file is read line by line: every non-blank line after the
header becomes one row, quoted fields may contain commas and doubled quotes,
and malformed quoting never raises. Rows shorter than the header are padded
with empty strings.
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import requests

from catalog.exceptions import LoadError
from catalog.models import Record

logger = logging.getLogger(__name__)


def parse_line(line: str) -> List[str]:
    """Split one line into trimmed field values.

    An unterminated quote swallows the rest of the line into the last field.
    Carriage returns are dropped wherever they appear.
    """
    # csv.reader rejects a bare "\r" inside an unquoted field
    reader = csv.reader([line.replace('\r', '')], skipinitialspace=True, strict=False)
    fields = next(reader, [])
    return [value.strip() for value in fields]


def parse_rows(text: str) -> Tuple[List[Dict[str, str]], List[str]]:
    """Parse CSV text into (rows, headers).

    The first line is the header. Blank lines are skipped, missing trailing
    fields map to ``""`` and extra trailing fields are dropped.
    """
    lines = text.lstrip('\ufeff').split('\n')
    headers = parse_line(lines[0]) if lines else []
    rows: List[Dict[str, str]] = []

    for line in lines[1:]:
        if not line.strip():
            continue
        values = parse_line(line)
        rows.append({
            header: values[index] if index < len(values) else ''
            for index, header in enumerate(headers)
        })

    return rows, headers


def parse_collection(text: str) -> Tuple[List[Record], List[str]]:
    """Parse CSV text into typed Records, numbered in source order."""
    rows, headers = parse_rows(text)
    records = [Record.from_row(index, row) for index, row in enumerate(rows)]
    logger.debug(f"Parsed {len(records)} records with {len(headers)} columns")
    return records, headers


def read_collection(source: Union[str, Path], timeout: Optional[float] = None) -> Tuple[List[Record], List[str]]:
    """
    Read and parse a collection export from a local path or an http(s) URL.

    Args:
        source: File path or URL of the CSV export
        timeout: Optional request timeout for URL sources

    Returns:
        Tuple of (records, headers)

    Raises:
        LoadError: If the source cannot be reached, read or parsed
    """
    source_str = str(source)
    if source_str.startswith(('http://', 'https://')):
        try:
            response = requests.get(source_str, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise LoadError(f"Could not fetch collection from {source_str}: {e}") from e
        text = response.text
    else:
        try:
            text = Path(source_str).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Could not read collection file {source_str}: {e}") from e

    try:
        records, headers = parse_collection(text)
    except csv.Error as e:
        raise LoadError(f"Could not parse collection from {source_str}: {e}") from e
    logger.info(f"Loaded {len(records)} records from {source_str}")
    return records, headers
