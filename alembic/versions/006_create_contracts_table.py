"""create contracts table

Revision ID: 006
Revises: 005
Create Date: 2025-06-02 10:50:00.000000

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
        "contracts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("application_id", sa.Integer(), nullable=False),
        sa.Column("tenant_id", sa.Integer(), nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("contract_text", sa.Text(), nullable=True),
        sa.Column("compliance_score", sa.Integer(), nullable=False, server_default="95"),
        sa.Column("signed_by_tenant", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("tenant_signed_at", sa.DateTime(), nullable=True),
        sa.Column("signed_by_landlord", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("landlord_signed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("application_id", name="uq_contracts_application_id"),
    )
    op.create_index("ix_contracts_id", "contracts", ["id"], unique=False)
    op.create_index("ix_contracts_application_id", "contracts", ["application_id"], unique=True)
    op.create_index("ix_contracts_tenant_id", "contracts", ["tenant_id"], unique=False)
    op.create_index("ix_contracts_landlord_id", "contracts", ["landlord_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_contracts_landlord_id", table_name="contracts")
    op.drop_index("ix_contracts_tenant_id", table_name="contracts")
    op.drop_index("ix_contracts_application_id", table_name="contracts")
    op.drop_index("ix_contracts_id", table_name="contracts")
    op.drop_table("contracts")
