"""Initial schema: gigs, events, comics, lineup with role and position constraints.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "gigs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("recurrence", sa.Text(), nullable=True),
        sa.Column("venue", sa.Text(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact", sa.Text(), nullable=True),
        sa.Column("instagram", sa.Text(), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_gigs_id", "gigs", ["id"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("gig_id", sa.Integer(), sa.ForeignKey("gigs.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("date", sa.Text(), nullable=False),
        sa.Column("time", sa.Text(), nullable=False),
        sa.Column("timeline", sa.Text(), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_events_id", "events", ["id"])
    op.create_index("ix_events_gig_date", "events", ["gig_id", "date"])

    op.create_table(
        "comics",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("contact", sa.Text(), nullable=True),
        sa.Column("default_fee", sa.Text(), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_comics_id", "comics", ["id"])
    op.create_index("ix_comics_name", "comics", ["name"])

    op.create_table(
        "lineup",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("comic_id", sa.Integer(), sa.ForeignKey("comics.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("fee", sa.Text(), nullable=True),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.CheckConstraint("role IN ('MC', 'HEADLINER', 'COMIC')", name="check_lineup_role"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_lineup_id", "lineup", ["id"])
    op.create_index("ix_lineup_event_id", "lineup", ["event_id"])
    op.create_index("ix_lineup_comic_id", "lineup", ["comic_id"])
    # ONE MC AND ONE HEADLINER PER EVENT, enforced by the database so two
    # simultaneous bookings cannot both succeed.
    op.create_index(
        "uq_lineup_event_headline_role",
        "lineup",
        ["event_id", "role"],
        unique=True,
        sqlite_where=sa.text("role IN ('MC', 'HEADLINER')"),
        postgresql_where=sa.text("role IN ('MC', 'HEADLINER')"),
    )
    # Supporting comics: one comic per position within an event
    op.create_index(
        "uq_lineup_event_comic_position",
        "lineup",
        ["event_id", "position"],
        unique=True,
        sqlite_where=sa.text("role = 'COMIC'"),
        postgresql_where=sa.text("role = 'COMIC'"),
    )


def downgrade() -> None:
    op.drop_table("lineup")
    op.drop_table("comics")
    op.drop_table("events")
    op.drop_table("gigs")
