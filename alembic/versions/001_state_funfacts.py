"""Initial schema — state_funfacts.

Revision ID: 001_state_funfacts
Revises: None
Create Date: 2026-10-19

One row per state code holding the user-contributed fun facts as a JSON array.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_state_funfacts"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "state_funfacts",
        sa.Column("state_code", sa.String(2), primary_key=True),
        sa.Column("funfacts", sa.JSON, nullable=False, server_default="[]"),
    )


def downgrade() -> None:
    op.drop_table("state_funfacts")
