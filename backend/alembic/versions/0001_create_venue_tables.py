"""Create venue, rating and reservation tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamp(name: str) -> sa.Column:  # type: ignore[type-arg]
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    op.create_table(
        "venue_types",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_venue_types")),
        sa.UniqueConstraint("type", name=op.f("uq_venue_types_type")),
    )
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("username", name=op.f("uq_users_username")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )
    op.create_table(
        "venues",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("working_hours", sa.String(length=100), nullable=False),
        sa.Column("maximum_capacity", sa.Integer(), nullable=False),
        sa.Column("venue_type_id", sa.Integer(), nullable=False),
        sa.Column("average_rating", sa.Float(), server_default="0", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint(
            "maximum_capacity > 0", name=op.f("ck_venues_maximum_capacity_positive")
        ),
        sa.CheckConstraint(
            "average_rating >= 0 AND average_rating <= 5",
            name=op.f("ck_venues_average_rating_range"),
        ),
        sa.ForeignKeyConstraint(
            ["venue_type_id"],
            ["venue_types.id"],
            name=op.f("fk_venues_venue_type_id_venue_types"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_venues")),
    )
    op.create_index(op.f("ix_venues_location"), "venues", ["location"])
    op.create_index(op.f("ix_venues_venue_type_id"), "venues", ["venue_type_id"])

    op.create_table(
        "venue_ratings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("venue_id", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "rating >= 0.5 AND rating <= 5", name=op.f("ck_venue_ratings_rating_range")
        ),
        sa.ForeignKeyConstraint(
            ["venue_id"],
            ["venues.id"],
            name=op.f("fk_venue_ratings_venue_id_venues"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_venue_ratings")),
    )
    op.create_index(op.f("ix_venue_ratings_venue_id"), "venue_ratings", ["venue_id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("venue_id", sa.Integer(), nullable=False),
        sa.Column("reserved_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("number_of_guests", sa.Integer(), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "number_of_guests > 0", name=op.f("ck_reservations_number_of_guests_positive")
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_reservations_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["venue_id"],
            ["venues.id"],
            name=op.f("fk_reservations_venue_id_venues"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_reservations")),
    )
    op.create_index(op.f("ix_reservations_user_id"), "reservations", ["user_id"])
    op.create_index(op.f("ix_reservations_venue_id"), "reservations", ["venue_id"])
    op.create_index(op.f("ix_reservations_reserved_at"), "reservations", ["reserved_at"])


def downgrade() -> None:
    op.drop_table("reservations")
    op.drop_table("venue_ratings")
    op.drop_table("venues")
    op.drop_table("users")
    op.drop_table("venue_types")
