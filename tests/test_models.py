from __future__ import annotations

import io

from sqlalchemy.dialects import mysql, sqlite
from sqlalchemy.schema import CreateTable

from gazetteer.db.models import County, Place
from gazetteer.importer import import_stream


def _ddl(model, dialect) -> str:
    return str(CreateTable(model.__table__).compile(dialect=dialect))


def test_text_columns_use_binary_collation_on_mysql() -> None:
    assert _ddl(County, mysql.dialect()).count("COLLATE utf8mb4_bin") == 1
    assert _ddl(Place, mysql.dialect()).count("COLLATE utf8mb4_bin") == 2


def test_sqlite_ddl_has_no_collation() -> None:
    assert "COLLATE" not in _ddl(Place, sqlite.dialect())


def test_import_keeps_places_differing_only_in_case(db, count_rows) -> None:
    result = import_stream(db, io.StringIO("8127;Aba;Fejér\n8127;ABA;Fejér\n8127;Ába;Fejér\n"))

    assert result.places_created == 3
    assert count_rows(Place) == 3
