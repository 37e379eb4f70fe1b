from __future__ import annotations

import os
import time
import logging
import subprocess
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import OperationalError

from gazetteer.core.config import settings

logger = logging.getLogger("gazetteer.migrate")


def wait_for_db(engine, timeout_s: int = 60) -> None:
    """Wait until the database is accepting connections."""
    start = time.time()
    delay = 1.0

    while True:
        try:
            with engine.begin() as conn:
                conn.execute(text("SELECT 1"))
            return
        except OperationalError as e:
            if time.time() - start > timeout_s:
                raise
            logger.info("Database not ready yet (%s), retrying in %.1fs", e.__class__.__name__, delay)
            time.sleep(delay)
            delay = min(delay * 1.5, 5.0)


def run(cmd: list[str]) -> int:
    p = subprocess.run(cmd, check=False)
    return p.returncode


def main() -> int:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    dsn = os.getenv("DATABASE_URL") or settings.DATABASE_URL
    engine = create_engine(dsn, future=True, pool_pre_ping=True)

    # Wait for DB readiness (important in docker-compose)
    wait_for_db(engine, timeout_s=int(os.getenv("DB_WAIT_TIMEOUT", "90")))

    tables = set(inspect(engine).get_table_names())
    engine.dispose()

    if "alembic_version" not in tables and "counties" in tables:
        # Existing schema without alembic tracking: stamp head
        rc = run(["alembic", "stamp", "head"])
    else:
        rc = run(["alembic", "upgrade", "head"])
    if rc != 0:
        # fail fast so the schema doesn't drift from alembic_version
        logger.error("alembic exited with %s", rc)
        return rc

    # Import the postal code list (idempotent)
    if settings.AUTO_IMPORT_PLACES:
        from gazetteer.core.errors import ImportSourceError
        from gazetteer.db.session import SessionLocal
        from gazetteer.importer import import_file

        db = SessionLocal()
        try:
            import_file(db, settings.IMPORT_FILE)
        except ImportSourceError as exc:
            logger.error("Place import failed: %s", exc)
            return 1
        finally:
            db.close()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
