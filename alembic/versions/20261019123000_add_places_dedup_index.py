"""add places dedup index

Revision ID: 20261019123000
Revises: 20261019120000
Create Date: 2026-10-19

The bulk import looks every row up by (postal_code, name, county_id).
"""

from alembic import op
from sqlalchemy import inspect
from sqlalchemy.exc import NoSuchTableError

# revision identifiers, used by Alembic.
revision = "20261019123000"
down_revision = "20261019120000"
branch_labels = None
depends_on = None

INDEX_NAME = "ix_places_dedup"


def _index_exists(table_name: str, index_name: str) -> bool:
    insp = inspect(op.get_bind())
    try:
        return any(i.get("name") == index_name for i in insp.get_indexes(table_name))
    except NoSuchTableError:
        return False


def upgrade() -> None:
    # Idempotent upgrade: only apply if missing.
    if not _index_exists("places", INDEX_NAME):
        op.create_index(INDEX_NAME, "places", ["postal_code", "name", "county_id"], unique=False)


def downgrade() -> None:
    if _index_exists("places", INDEX_NAME):
        op.drop_index(INDEX_NAME, table_name="places")
