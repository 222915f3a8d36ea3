"""Accounts, organizer requests and events

Revision ID: 3c1f0a9d2b7e
Revises: 
Create Date: 2026-10-19 10:12:41.218733

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d2b7e'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    role_enum = postgresql.ENUM('SUPER_ADMIN', 'INSTITUTION', 'USER', name='roleenum')
    role_enum.create(op.get_bind())
    
    request_status_enum = postgresql.ENUM('PENDING', 'APPROVED', 'REJECTED', name='requeststatusenum')
    request_status_enum.create(op.get_bind())
    
    # Sign-in identities, created before the profile they belong to
    op.create_table(
        'auth_identities',
        sa.Column('uid', sa.String(128), primary_key=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('hashed_password', sa.String(255), nullable=True),
        sa.Column('provider', sa.String(32), nullable=False, server_default='password'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_auth_identities_email', 'auth_identities', ['email'], unique=True)
    
    op.create_table(
        'users',
        sa.Column('uid', sa.String(128), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(32), nullable=True),
        sa.Column('role', postgresql.ENUM('SUPER_ADMIN', 'INSTITUTION', 'USER', name='roleenum', create_type=False), nullable=False, server_default='USER'),
        sa.Column('avatar', sa.String(1024), nullable=True),
        sa.Column('bio', sa.Text, nullable=True),
        sa.Column('blocked', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('idx_user_role', 'users', ['role'])
    
    op.create_table(
        'organizer_requests',
        sa.Column('id', sa.String(128), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(32), nullable=True),
        sa.Column('status', postgresql.ENUM('PENDING', 'APPROVED', 'REJECTED', name='requeststatusenum', create_type=False), nullable=False, server_default='PENDING'),
        sa.Column('timestamp', sa.BigInteger, nullable=False),
        sa.Column('uid', sa.String(128), nullable=True)
    )
    op.create_index('idx_org_request_status', 'organizer_requests', ['status'])
    op.create_index('idx_org_request_timestamp', 'organizer_requests', ['timestamp'])
    
    op.create_table(
        'events',
        sa.Column('id', sa.String(128), primary_key=True),
        sa.Column('organizer_id', sa.String(128), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('date', sa.String(64), nullable=False),
        sa.Column('time', sa.String(64), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('image_url', sa.String(1024), nullable=False),
        sa.Column('registration_link', sa.String(1024), nullable=False),
        sa.Column('map_embed_url', sa.Text, nullable=True),
        sa.Column('sheet_link', sa.String(1024), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False)
    )
    op.create_index('idx_event_organizer', 'events', ['organizer_id'])
    op.create_index('idx_event_created_at', 'events', ['created_at'])


def downgrade() -> None:
    op.drop_table('events')
    op.drop_table('organizer_requests')
    op.drop_table('users')
    op.drop_table('auth_identities')
    
    sa.Enum(name='requeststatusenum').drop(op.get_bind())
    sa.Enum(name='roleenum').drop(op.get_bind())
