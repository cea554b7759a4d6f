"""create_news_items_table

Revision ID: 7c1e4a9d2b30
Revises:
Create Date: 2026-10-18 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1e4a9d2b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create news_items table keyed by guid."""
    op.create_table('news_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guid', sa.String(length=1000), nullable=False),
        sa.Column('source_id', sa.String(length=100), nullable=False),
        sa.Column('language', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=1000), nullable=False),
        sa.Column('link', sa.String(length=2000), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('author', sa.String(length=500), nullable=True),
        sa.Column('categories', sa.JSON(), nullable=True),
        sa.Column('image_url', sa.String(length=2000), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('guid')
    )

    # Newest-first reads per source and per language
    op.create_index('idx_news_items_source_published', 'news_items', ['source_id', 'published_at'])
    op.create_index('idx_news_items_language_published', 'news_items', ['language', 'published_at'])


def downgrade() -> None:
    """Drop news_items table and indexes."""
    op.drop_index('idx_news_items_language_published', 'news_items')
    op.drop_index('idx_news_items_source_published', 'news_items')
    op.drop_table('news_items')
