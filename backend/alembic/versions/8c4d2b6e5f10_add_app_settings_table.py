"""add app_settings table

Revision ID: 8c4d2b6e5f10
Revises: 3e1f0a9c7b21
Create Date: 2026-10-19 10:20:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c4d2b6e5f10'
down_revision: Union[str, Sequence[str], None] = '3e1f0a9c7b21'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    tables = inspector.get_table_names()
    if 'app_settings' not in tables:
        op.create_table(
            'app_settings',
            sa.Column('id', sa.Integer(), primary_key=True, nullable=False),
            sa.Column('tracking_interval_ms', sa.Integer(), nullable=False),
            sa.Column('distance_interval_m', sa.Integer(), nullable=False),
            sa.Column('enable_speed_test', sa.Boolean(), nullable=False),
            sa.Column('show_path', sa.Boolean(), nullable=False),
            sa.Column('circle_radius_m', sa.Integer(), nullable=False),
            sa.Column('auto_save', sa.Boolean(), nullable=False),
        )


def downgrade() -> None:
    # Safe drop if exists
    op.execute('DROP TABLE IF EXISTS app_settings')
