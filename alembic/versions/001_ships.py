"""create ships table

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "ships",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("planet", sa.String(length=50), nullable=False),
        sa.Column(
            "ship_type",
            sa.Enum("TRANSPORT", "MILITARY", "MERCHANT", name="shiptype"),
            nullable=False,
        ),
        sa.Column("prod_date", sa.DateTime(), nullable=False),
        sa.Column("is_used", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("speed", sa.Float(), nullable=False),
        sa.Column("crew_size", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index(op.f("ix_ships_id"), "ships", ["id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_ships_id"), table_name="ships")
    op.drop_table("ships")
