"""create users

Revision ID: 20211211230013
Revises:
Create Date: 2021-12-11 23:00:13

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20211211230013"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("index_users_on_username", "users", ["username"], unique=True)


def downgrade() -> None:
    op.drop_index("index_users_on_username", table_name="users")
    op.drop_table("users")
