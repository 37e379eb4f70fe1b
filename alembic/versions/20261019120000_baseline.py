"""baseline: counties and places

Revision ID: 20261019120000
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = "20261019120000"
down_revision = None
branch_labels = None
depends_on = None


def _exact_string(length: int) -> sa.String:
    # case- and accent-sensitive on MySQL, matching the models
    return sa.String(length=length).with_variant(sa.String(length=length, collation="utf8mb4_bin"), "mysql", "mariadb")


def upgrade() -> None:
    bind = op.get_bind()
    insp = inspect(bind)
    tables = insp.get_table_names()

    if "counties" not in tables:
        op.create_table(
            "counties",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", _exact_string(150), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        )
        op.create_index("ix_counties_name", "counties", ["name"], unique=True)

    if "places" not in tables:
        op.create_table(
            "places",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("postal_code", _exact_string(16), nullable=False),
            sa.Column("name", _exact_string(150), nullable=False),
            # no ON DELETE CASCADE: counties with places are not deletable
            sa.Column("county_id", sa.Integer(), sa.ForeignKey("counties.id"), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        )
        op.create_index("ix_places_county_id", "places", ["county_id"])


def downgrade() -> None:
    bind = op.get_bind()
    insp = inspect(bind)
    tables = insp.get_table_names()
    if "places" in tables:
        op.drop_table("places")
    if "counties" in tables:
        op.drop_table("counties")
