"""create property images table

Revision ID: 004
Revises: 003
Create Date: 2025-06-02 10:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "property_images",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("public_id", sa.String(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_property_images_id", "property_images", ["id"], unique=False)
    op.create_index(
        "ix_property_images_property_id", "property_images", ["property_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_property_images_property_id", table_name="property_images")
    op.drop_index("ix_property_images_id", table_name="property_images")
    op.drop_table("property_images")
