from __future__ import annotations

import argparse
import logging

from gazetteer.core.config import settings
from gazetteer.core.errors import ImportSourceError
from gazetteer.importer import import_file

logger = logging.getLogger("gazetteer.importer")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m gazetteer.scripts.import_places",
        description="Import counties and places from a ';'-delimited postal code file.",
    )
    parser.add_argument("path", nargs="?", default=settings.IMPORT_FILE, help="source file (default: %(default)s)")
    parser.add_argument("--encoding", default=settings.IMPORT_ENCODING, help="source encoding (default: %(default)s)")
    return parser


def main(argv: list[str] | None = None) -> int:
    # Allow manual execution:
    #   python -m gazetteer.scripts.import_places data/iranyitoszamok.csv
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    from gazetteer.db.session import SessionLocal

    db = SessionLocal()
    try:
        result = import_file(db, args.path, encoding=args.encoding)
    except ImportSourceError as exc:
        logger.error("Import failed, nothing was written: %s", exc)
        return 1
    finally:
        db.close()

    print(
        f"CSV import finished successfully! {result.rows_imported} rows imported, "
        f"{result.rows_skipped} skipped, {result.counties_created} counties and "
        f"{result.places_created} places created."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
