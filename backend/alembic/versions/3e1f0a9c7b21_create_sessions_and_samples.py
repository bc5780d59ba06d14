"""create users, tracking_sessions, samples

Revision ID: 3e1f0a9c7b21
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3e1f0a9c7b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'tracking_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('source', sa.String(20), server_default='device', nullable=False),
        sa.Column('sim_heading_rad', sa.Float(), nullable=True),
        sa.Column('sim_distance_m', sa.Float(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_tracking_sessions_id', 'tracking_sessions', ['id'])
    op.create_index('ix_tracking_sessions_user_id', 'tracking_sessions', ['user_id'])

    op.create_table(
        'samples',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('speed_mbps', sa.Float(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['tracking_sessions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_samples_id', 'samples', ['id'])
    op.create_index('ix_samples_session_id', 'samples', ['session_id'])


def downgrade() -> None:
    op.drop_index('ix_samples_session_id', table_name='samples')
    op.drop_index('ix_samples_id', table_name='samples')
    op.drop_table('samples')
    op.drop_index('ix_tracking_sessions_user_id', table_name='tracking_sessions')
    op.drop_index('ix_tracking_sessions_id', table_name='tracking_sessions')
    op.drop_table('tracking_sessions')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
