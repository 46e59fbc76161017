"""create roles table and seed tenant, landlord and admin

Revision ID: 001
Revises:
Create Date: 2025-06-02 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Registration may pick tenant or landlord; admin is only given to the seeded account
ROLE_NAMES = ("admin", "tenant", "landlord")


def upgrade() -> None:
    roles = op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
    )
    op.create_index(op.f("ix_roles_id"), "roles", ["id"])
    op.create_index(op.f("ix_roles_name"), "roles", ["name"])

    op.bulk_insert(roles, [{"name": name} for name in ROLE_NAMES])


def downgrade() -> None:
    op.drop_index(op.f("ix_roles_name"), table_name="roles")
    op.drop_index(op.f("ix_roles_id"), table_name="roles")
    op.drop_table("roles")
