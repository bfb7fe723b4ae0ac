"""create games history table

Revision ID: 4c2a9e7d1b30
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2a9e7d1b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)

    # Table may already exist when it was created by `flask history-reset`
    if 'games' in set(insp.get_table_names()):
        return

    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_uuid', sa.String(length=36), nullable=False),
        sa.Column('winner', sa.String(length=8), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_moves', sa.Integer(), nullable=False),
        sa.Column('final_board', sa.String(length=9), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_games_game_uuid', 'games', ['game_uuid'], unique=False)
    op.create_index('ix_games_ended_at', 'games', ['ended_at'], unique=False)


def downgrade():
    op.drop_index('ix_games_ended_at', table_name='games')
    op.drop_index('ix_games_game_uuid', table_name='games')
    op.drop_table('games')
