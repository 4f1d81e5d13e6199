"""add feed and activity indexes

Revision ID: 96712afada05
Revises: 4c1e07d2a9b3
Create Date: 2026-10-19 09:40:02.522433

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '96712afada05'
down_revision: Union[str, Sequence[str], None] = '4c1e07d2a9b3'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Feed: posts by a set of authors, newest first
    op.create_index('idx_posts_user_created', 'posts', ['user_id', 'created_at'], unique=False)
    op.create_index('idx_posts_created', 'posts', ['created_at'], unique=False)
    # Posts by hashtag
    op.create_index('idx_posthashtags_tag_post', 'post_hashtags', ['hashtag_id', 'post_id'], unique=False)
    # Activity listing filtered by type and date range
    op.create_index(
        'idx_activity_user_type_created',
        'activity_logs',
        ['user_id', 'activity_type', 'created_at'],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_activity_user_type_created', table_name='activity_logs')
    op.drop_index('idx_posthashtags_tag_post', table_name='post_hashtags')
    op.drop_index('idx_posts_created', table_name='posts')
    op.drop_index('idx_posts_user_created', table_name='posts')
