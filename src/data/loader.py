"""Benefits CSV loader.

Reads the data source (local file or http(s) URL) and maps each row to a
BenefitRecord by header name. Any problem fails the whole load: callers
never see a partial record set.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path

import httpx

from src.errors import DataLoadError
from src.schemas.benefits import BenefitRecord

logger = logging.getLogger(__name__)

# CSV header → BenefitRecord field
_TEXT_COLUMNS: dict[str, str] = {
    "Service": "service",
    "Description": "description",
    "URL": "url",
    "Department": "department",
}
_FLAG_COLUMNS: dict[str, str] = {
    "Age": "age_restricted",
    "Income": "income_restricted",
    "Own_Housing": "own_housing_required",
    "Disability": "disability_required",
    "Veteran": "veteran_required",
}
_INT_COLUMNS: dict[str, str] = {
    "Age Min": "age_min",
    "Age Max": "age_max",
}

_FLAG_TRUE = "TRUE"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _flag(value: str | None) -> bool:
    """Only the literal string TRUE sets a flag."""
    return value == _FLAG_TRUE


def _leading_int(value: str | None) -> int | None:
    """Parse "65", "65 years" or "12.5" to an int; anything else to None."""
    if not value:
        return None
    m = _LEADING_INT.match(value)
    return int(m.group(1)) if m else None


def _text(value: str | None) -> str | None:
    return value if value else None


def row_to_record(row: dict[str, str | None]) -> BenefitRecord:
    """Map one header-keyed CSV row to a BenefitRecord. Unknown columns are ignored."""
    fields: dict[str, object] = {}
    for column, name in _TEXT_COLUMNS.items():
        fields[name] = _text(row.get(column))
    for column, name in _FLAG_COLUMNS.items():
        fields[name] = _flag(row.get(column))
    for column, name in _INT_COLUMNS.items():
        fields[name] = _leading_int(row.get(column))
    return BenefitRecord(**fields)


def parse_benefits_csv(text: str, source: str = "<memory>") -> list[BenefitRecord]:
    """Parse CSV text with a header row into records.

    Raises:
        DataLoadError: No header row, or a row whose field count does not
            match the header.
    """
    reader = csv.DictReader(io.StringIO(text), skipinitialspace=False)
    try:
        header = reader.fieldnames
        if not header:
            msg = "CSV has no header row"
            raise DataLoadError(msg, source=source)

        records: list[BenefitRecord] = []
        for row in reader:
            # DictReader files surplus cells under None and pads short rows with None
            if None in row or any(v is None for v in row.values()):
                msg = f"Malformed row at line {reader.line_num}: expected {len(header)} fields"
                raise DataLoadError(msg, source=source)
            records.append(row_to_record(row))
    except csv.Error as exc:
        msg = f"CSV parse error at line {reader.line_num}: {exc}"
        raise DataLoadError(msg, source=source) from exc

    return records


async def read_source(source: str, timeout: float = 10.0) -> str:
    """Fetch the raw CSV text from a URL or a local path.

    Raises:
        DataLoadError: The source is unreachable or unreadable.
    """
    if source.startswith(("http://", "https://")):
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as client:
                response = await client.get(source)
                response.raise_for_status()
                return response.text
        except httpx.HTTPStatusError as exc:
            msg = f"HTTP {exc.response.status_code} fetching benefits data"
            raise DataLoadError(msg, source=source) from exc
        except httpx.HTTPError as exc:
            msg = f"Could not reach benefits data source: {exc}"
            raise DataLoadError(msg, source=source) from exc

    try:
        # utf-8-sig drops the BOM spreadsheet exports like to add
        return Path(source).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Could not read benefits data file: {exc}"
        raise DataLoadError(msg, source=source) from exc


async def load_benefits(source: str, timeout: float = 10.0) -> list[BenefitRecord]:
    """Read and parse the data source into records."""
    text = await read_source(source, timeout=timeout)
    records = parse_benefits_csv(text, source=source)
    logger.info("Benefits data loaded: %d records from %s", len(records), source)
    return records
