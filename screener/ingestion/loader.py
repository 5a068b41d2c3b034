"""CSV ingestion of solution submissions into the record store."""

import csv
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from screener.errors import IngestionError
from screener.ingestion.columns import SOLUTION_ID_COLUMN, map_row
from screener.models import NewSolution
from screener.storage.repositories import RecordStore

logger = logging.getLogger(__name__)

# Free-text answers can be long; the csv module default is 128 KiB per field.
FIELD_SIZE_LIMIT = 16 * 1024 * 1024


def iter_rows(stream: TextIO) -> Iterator[dict[str, str]]:
    """
    Yield header-keyed rows with trimmed cells.

    The dialect is non-strict so stray quotes are kept as text instead of
    failing. Blank rows are skipped. Short rows simply lack the trailing keys and
    extra cells are dropped. A row the csv module still rejects is logged and
    skipped.
    """
    csv.field_size_limit(max(csv.field_size_limit(), FIELD_SIZE_LIMIT))
    reader = csv.reader(stream, strict=False)
    try:
        header = next(reader, None)
        if header is None:
            return
        columns = [name.strip().lstrip("\ufeff").strip() for name in header]

        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as exc:
                logger.warning("Skipping unparsable CSV row near line %d: %s", reader.line_num, exc)
                continue
            if not any(cell.strip() for cell in row):
                continue
            yield {name: cell.strip() for name, cell in zip(columns, row)}
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise IngestionError(f"Could not read CSV stream: {exc}") from exc


def ingest_solutions(stream: TextIO, store: RecordStore, *, replace: bool = False) -> int:
    """
    Parse a submissions CSV and upsert one record per unique Solution ID.

    Within a single run the first row for a Solution ID wins and later rows for
    the same ID are ignored. With ``replace`` the existing solutions are cleared
    first. Returns the number of unique solutions loaded.
    """
    unique: dict[str, NewSolution] = {}
    for row in iter_rows(stream):
        solution_id = row.get(SOLUTION_ID_COLUMN, "")
        if not solution_id or solution_id in unique:
            continue
        try:
            unique[solution_id] = NewSolution(**map_row(row))
        except ValidationError as exc:
            logger.warning("Skipping CSV row for solution %s: %s", solution_id, exc)

    logger.info("Parsed %d unique solutions from CSV", len(unique))
    if replace:
        store.clear_solutions()
    for solution in unique.values():
        store.upsert_solution(solution)
    return len(unique)


def load_solutions_file(path: Path, store: RecordStore) -> int:
    """
    Bulk-load the startup CSV, replacing any solutions already in the store.
    A missing or unreadable file is logged and yields 0; it never raises.
    """
    if not path.exists():
        logger.info("CSV file not found at %s", path.resolve())
        return 0

    logger.info("Loading solutions from CSV file: %s", path.resolve())
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            count = ingest_solutions(handle, store, replace=True)
    except (OSError, IngestionError) as exc:
        logger.error("Error loading solutions from %s: %s", path, exc)
        return 0

    logger.info("Successfully loaded %d solutions from CSV file", count)
    return count
