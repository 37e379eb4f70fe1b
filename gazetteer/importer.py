"""
Bulk import of counties and places from the postal-code list.

The source is a `;`-delimited UTF-8 text file with the columns
``postal_code;place_name;county_name[;...]``. Each valid row resolves to one
County (looked up by name, created on first sight) and one Place (looked up
by the dedup key ``(postal_code, name, county_id)``). Re-running an import on
the same file is a no-op.

The whole run is one transaction: nothing is committed until every row has
been processed, and any failure rolls everything back.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from datetime import datetime
from os import PathLike
from typing import Iterable, TextIO

from sqlalchemy.orm import Session

from gazetteer.core.config import settings
from gazetteer.core.errors import ImportSourceError
from gazetteer.db.base import utcnow
from gazetteer.db.models.county import County
from gazetteer.db.models.place import Place

logger = logging.getLogger("gazetteer.importer")

DELIMITER = ";"


@dataclass
class ImportResult:
    rows_read: int = 0
    rows_imported: int = 0
    rows_skipped: int = 0
    counties_created: int = 0
    places_created: int = 0


def parse_row(row: list[str]) -> tuple[str, str, str] | None:
    """Return (postal_code, place_name, county_name), or None for rows to skip."""
    if len(row) < 3:
        return None
    postal_code, place_name, county_name = (value.strip() for value in row[:3])
    if not postal_code or not place_name or not county_name:
        return None
    return postal_code, place_name, county_name


def _get_or_create_county(db: Session, name: str, now: datetime, result: ImportResult) -> int:
    c = db.query(County).filter(County.name == name).first()
    if not c:
        c = County(name=name, created_at=now, updated_at=now)
        db.add(c)
        db.flush()  # populate c.id
        result.counties_created += 1
    return c.id


def _get_or_create_place(
    db: Session,
    *,
    postal_code: str,
    name: str,
    county_id: int,
    now: datetime,
    result: ImportResult,
) -> None:
    exists = (
        db.query(Place.id)
        .filter(Place.postal_code == postal_code, Place.name == name, Place.county_id == county_id)
        .first()
    )
    if exists:
        return
    db.add(Place(postal_code=postal_code, name=name, county_id=county_id, created_at=now, updated_at=now))
    # flushed so a repeated row later in the same file finds it
    db.flush()
    result.places_created += 1


def import_rows(db: Session, rows: Iterable[list[str]], *, now: datetime | None = None) -> ImportResult:
    """Apply parsed rows to the session without committing."""
    now = now or utcnow()
    result = ImportResult()
    # county name -> id, scoped to this run
    counties: dict[str, int] = {}

    for line_no, row in enumerate(rows, start=1):
        result.rows_read += 1
        parsed = parse_row(row)
        if parsed is None:
            result.rows_skipped += 1
            logger.debug("Skipping line %s: %r", line_no, row)
            continue

        postal_code, place_name, county_name = parsed
        county_id = counties.get(county_name)
        if county_id is None:
            county_id = _get_or_create_county(db, county_name, now, result)
            counties[county_name] = county_id

        _get_or_create_place(
            db,
            postal_code=postal_code,
            name=place_name,
            county_id=county_id,
            now=now,
            result=result,
        )
        result.rows_imported += 1

    return result


def import_stream(db: Session, stream: TextIO | Iterable[str]) -> ImportResult:
    """Import every row of `stream` in one transaction; commit on success, roll back on any error."""
    reader = csv.reader(stream, delimiter=DELIMITER)
    try:
        result = import_rows(db, reader)
        db.commit()
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        db.rollback()
        logger.error("Import aborted, source could not be read: %s", exc)
        raise ImportSourceError(f"Import source could not be read: {exc}") from exc
    except Exception:
        db.rollback()
        logger.exception("Import aborted, transaction rolled back")
        raise

    logger.info(
        "Import finished: %s rows read, %s imported, %s skipped, %s counties and %s places created",
        result.rows_read,
        result.rows_imported,
        result.rows_skipped,
        result.counties_created,
        result.places_created,
    )
    return result


def _source_encoding(encoding: str) -> str:
    # utf-8-sig also reads files without a BOM; a BOM would otherwise stick to the first postal code
    if encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
        return "utf-8-sig"
    return encoding


def import_file(db: Session, path: str | PathLike, encoding: str | None = None) -> ImportResult:
    encoding = _source_encoding(encoding or settings.IMPORT_ENCODING)
    try:
        fh = open(path, encoding=encoding, newline="")
    except (OSError, LookupError) as exc:
        logger.error("Cannot open import source %s: %s", path, exc)
        raise ImportSourceError(f"Cannot open import source {path}: {exc}") from exc

    logger.info("Importing places from %s", path)
    with fh:
        return import_stream(db, fh)
