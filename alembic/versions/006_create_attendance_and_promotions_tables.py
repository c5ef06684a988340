"""create attendance and promotions tables

Revision ID: 006
Revises: 005
Create Date: 2026-09-16 10:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "attendance",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("class_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("class_date", sa.Date(), nullable=False),
        sa.Column("check_in_time", sa.DateTime(), nullable=False),
        sa.Column("checked_in_by", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["checked_in_by"], ["users.id"]),
        # At most one check-in per member per class session; concurrent
        # check-ins are decided here, not by a prior read
        sa.UniqueConstraint(
            "class_id", "user_id", "class_date", name="uq_attendance_class_user_date"
        ),
    )
    op.create_index("ix_attendance_id", "attendance", ["id"], unique=False)
    op.create_index("ix_attendance_class_id", "attendance", ["class_id"], unique=False)
    op.create_index("ix_attendance_user_id", "attendance", ["user_id"], unique=False)

    op.create_table(
        "promotions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("class_id", sa.Integer(), nullable=False),
        sa.Column("previous_belt", sa.String(32), nullable=False),
        sa.Column("previous_stripes", sa.Integer(), nullable=False),
        sa.Column("new_belt", sa.String(32), nullable=False),
        sa.Column("new_stripes", sa.Integer(), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("promotion_date", sa.Date(), nullable=False),
        sa.Column("occurred_at", sa.DateTime(), nullable=False),
        sa.Column("graded_by", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"]),
        sa.ForeignKeyConstraint(["graded_by"], ["users.id"]),
        sa.CheckConstraint(
            "new_stripes >= 0 AND previous_stripes >= 0",
            name="ck_promotions_stripes_non_negative",
        ),
    )
    op.create_index("ix_promotions_id", "promotions", ["id"], unique=False)
    op.create_index("ix_promotions_user_id", "promotions", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_promotions_user_id", table_name="promotions")
    op.drop_index("ix_promotions_id", table_name="promotions")
    op.drop_table("promotions")
    op.drop_index("ix_attendance_user_id", table_name="attendance")
    op.drop_index("ix_attendance_class_id", table_name="attendance")
    op.drop_index("ix_attendance_id", table_name="attendance")
    op.drop_table("attendance")
