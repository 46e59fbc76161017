"""create applications table

Revision ID: 005
Revises: 004
Create Date: 2025-06-02 10:40:00.000000

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
        "applications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("move_in_date", sa.String(32), nullable=True),
        sa.Column("employment_status", sa.String(100), nullable=True),
        sa.Column("annual_income", sa.Float(), nullable=True),
        sa.Column("references", sa.Text(), nullable=True),
        sa.Column("pet_friendly", sa.Boolean(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'rejected')",
            name="ck_applications_status",
        ),
    )
    op.create_index("ix_applications_id", "applications", ["id"], unique=False)
    op.create_index("ix_applications_tenant_id", "applications", ["tenant_id"], unique=False)
    op.create_index("ix_applications_property_id", "applications", ["property_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_applications_property_id", table_name="applications")
    op.drop_index("ix_applications_tenant_id", table_name="applications")
    op.drop_index("ix_applications_id", table_name="applications")
    op.drop_table("applications")
