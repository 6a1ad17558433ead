"""initial schema: pulls, trains, station_times, schema_version

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "schema_version",
        sa.Column("version", sa.Integer(), primary_key=True, autoincrement=False),
    )
    op.create_table(
        "pulls",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("pulled_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_pulls_pulled_at", "pulls", ["pulled_at"])

    op.create_table(
        "trains",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "pull_id", sa.Integer(),
            sa.ForeignKey("pulls.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("speed", sa.Float(), nullable=True),
        sa.Column("direction", sa.Float(), nullable=True),
        sa.Column("poll", sa.String(64), nullable=True),
        sa.Column("poll_min", sa.Integer(), nullable=True),
        sa.Column("departed", sa.Boolean(), nullable=False),
        sa.Column("arrived", sa.Boolean(), nullable=False),
        sa.Column("from_station", sa.String(100), nullable=False),
        sa.Column("to_station", sa.String(100), nullable=False),
        sa.Column("instance", sa.String(100), nullable=False),
        sa.UniqueConstraint("pull_id", "name", name="uq_trains_pull_name"),
    )

    op.create_table(
        "station_times",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "train_id", sa.Integer(),
            sa.ForeignKey("trains.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("station", sa.String(200), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        sa.Column("estimated", sa.String(64), nullable=True),
        sa.Column("scheduled", sa.String(64), nullable=True),
        sa.Column("eta", sa.String(64), nullable=True),
        sa.Column("arrival_estimated", sa.String(64), nullable=True),
        sa.Column("arrival_scheduled", sa.String(64), nullable=True),
        sa.Column("departure_estimated", sa.String(64), nullable=True),
        sa.Column("departure_scheduled", sa.String(64), nullable=True),
        sa.Column("diff", sa.String(64), nullable=True),
        sa.Column("diff_min", sa.Integer(), nullable=True),
    )
    op.create_index("ix_station_times_train_id", "station_times", ["train_id"])

    op.bulk_insert(
        sa.table("schema_version", sa.column("version", sa.Integer())),
        [{"version": 1}],
    )


def downgrade():
    op.drop_table("station_times")
    op.drop_table("trains")
    op.drop_table("pulls")
    op.drop_table("schema_version")
