"""create locations and membership types tables

Revision ID: 003
Revises: 002
Create Date: 2026-09-15 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_locations_id", "locations", ["id"], unique=False)

    op.create_table(
        "membership_types",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("location_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"]),
    )
    op.create_index("ix_membership_types_id", "membership_types", ["id"], unique=False)
    op.create_index(
        "ix_membership_types_location_id", "membership_types", ["location_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_membership_types_location_id", table_name="membership_types")
    op.drop_index("ix_membership_types_id", table_name="membership_types")
    op.drop_table("membership_types")
    op.drop_index("ix_locations_id", table_name="locations")
    op.drop_table("locations")
