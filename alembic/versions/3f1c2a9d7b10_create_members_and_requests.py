"""create members and requests tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a9d7b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'members',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('member_id', sa.String(length=64), nullable=False),
        sa.Column('organisation_info', sa.JSON(), nullable=False),
        sa.Column('user_snapshots', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=64), nullable=True),
        sa.Column('allowed_user_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_members'),
        sa.UniqueConstraint('member_id', name='uq_members_member_id'),
    )
    op.create_table(
        'requests',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('member_id', sa.String(length=64), nullable=False),
        sa.Column('organisation_info', sa.JSON(), nullable=False),
        sa.Column('request_status', sa.String(length=16), nullable=False, server_default='PENDING'),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_requests'),
    )
    op.create_index('ix_requests_member_id', 'requests', ['member_id'], unique=False)
    op.create_index(
        'ix_requests_status_created', 'requests', ['request_status', 'created_at'], unique=False
    )


def downgrade() -> None:
    op.drop_index('ix_requests_status_created', table_name='requests')
    op.drop_index('ix_requests_member_id', table_name='requests')
    op.drop_table('requests')
    op.drop_table('members')
