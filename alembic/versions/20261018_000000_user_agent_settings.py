"""User agent settings

Revision ID: 001_user_agent_settings
Revises:
Create Date: 2026-10-18 00:00:00.000000

Creates the per-user saved agent settings table.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '001_user_agent_settings'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the user_agent_settings table."""

    op.create_table(
        'user_agent_settings',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(255), nullable=False),
        sa.Column(
            'settings',
            sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', name='uq_user_agent_settings_user_id'),
    )
    op.create_index('ix_user_agent_settings_user_id', 'user_agent_settings', ['user_id'])


def downgrade() -> None:
    """Drop the user_agent_settings table."""

    op.drop_index('ix_user_agent_settings_user_id', table_name='user_agent_settings')
    op.drop_table('user_agent_settings')
