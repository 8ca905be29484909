"""create games

Revision ID: 20211214041522
Revises: 20211211230013
Create Date: 2021-12-14 04:15:22

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20211214041522"
down_revision: str | None = "20211211230013"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "games",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column(
            "data",
            sa.JSON(none_as_null=True).with_variant(
                postgresql.JSONB(none_as_null=True), "postgresql"
            ),
            nullable=True,
        ),
        sqlite_autoincrement=True,
    )
    op.create_index("index_games_on_name", "games", ["name"], unique=True)


def downgrade() -> None:
    op.drop_index("index_games_on_name", table_name="games")
    op.drop_table("games")
