"""Add bookmarks table

Revision ID: 003
Revises: 002
Create Date: 2025-09-01 10:10:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '003'
down_revision = '002'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # item_id has no foreign key: bookmarks may outlive the item they point at
    op.create_table(
        'bookmarks',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('item_type', sa.String(20), nullable=False),
        sa.Column('cached_title', sa.String(255), nullable=False, server_default='Unknown Item'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'item_id', 'item_type', name='uq_bookmarks_user_item'),
        sa.CheckConstraint("item_type IN ('problem', 'note', 'interview')", name='ck_bookmarks_item_type'),
    )

    op.create_index('ix_bookmarks_user_id', 'bookmarks', ['user_id'])
    op.create_index('ix_bookmarks_item', 'bookmarks', ['item_id', 'item_type'])


def downgrade() -> None:
    op.drop_index('ix_bookmarks_item', table_name='bookmarks')
    op.drop_index('ix_bookmarks_user_id', table_name='bookmarks')
    op.drop_table('bookmarks')
