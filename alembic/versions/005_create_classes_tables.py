"""create classes and class access tables

Revision ID: 005
Revises: 004
Create Date: 2026-09-16 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "classes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("location_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("membership_type_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"]),
        sa.ForeignKeyConstraint(["membership_type_id"], ["membership_types.id"]),
        # 0 = Sunday ... 6 = Saturday
        sa.CheckConstraint(
            "day_of_week >= 0 AND day_of_week <= 6",
            name="ck_classes_day_of_week_range",
        ),
    )
    op.create_index("ix_classes_id", "classes", ["id"], unique=False)
    op.create_index("ix_classes_location_id", "classes", ["location_id"], unique=False)

    op.create_table(
        "class_access",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("grader_user_id", sa.Integer(), nullable=False),
        sa.Column("class_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["grader_user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"]),
        sa.UniqueConstraint("grader_user_id", "class_id", name="uq_class_access_grader_class"),
    )
    op.create_index("ix_class_access_id", "class_access", ["id"], unique=False)
    op.create_index(
        "ix_class_access_grader_user_id", "class_access", ["grader_user_id"], unique=False
    )
    op.create_index("ix_class_access_class_id", "class_access", ["class_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_class_access_class_id", table_name="class_access")
    op.drop_index("ix_class_access_grader_user_id", table_name="class_access")
    op.drop_index("ix_class_access_id", table_name="class_access")
    op.drop_table("class_access")
    op.drop_index("ix_classes_location_id", table_name="classes")
    op.drop_index("ix_classes_id", table_name="classes")
    op.drop_table("classes")
