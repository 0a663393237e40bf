"""create_attempts_table

Revision ID: 3f9c2a7d1e84
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1e84'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the attempts table with its lookup and expiry indexes."""
    op.create_table(
        'attempts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('action', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    # Lookup by (address, action) for check and reset
    op.create_index('ix_attempts_address_action', 'attempts', ['address', 'action'])
    # Range scan for cleanup
    op.create_index('ix_attempts_expires_at', 'attempts', ['expires_at'])


def downgrade() -> None:
    """Drop the attempts table."""
    op.drop_index('ix_attempts_expires_at', table_name='attempts')
    op.drop_index('ix_attempts_address_action', table_name='attempts')
    op.drop_table('attempts')
