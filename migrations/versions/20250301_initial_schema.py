"""
Initial schema: both credential stores, storages, items and access tokens.

- admins and users have independent id spaces and per-table unique emails
- storages.user_id is unique (one storage per user)
- access_tokens carries (realm, principal_id) without a foreign key since the
  owner may live in either credential table
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial_20250301'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'admins',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('email', name='uq_admins_email'),
    )
    op.create_index('ix_admins_email', 'admins', ['email'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'storages',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', name='uq_storages_user_id'),
    )

    op.create_table(
        'items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('storage_id', sa.Integer(), sa.ForeignKey('storages.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_items_storage_id', 'items', ['storage_id'])

    op.create_table(
        'access_tokens',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('realm', sa.String(length=16), nullable=False),
        sa.Column('principal_id', sa.Integer(), nullable=False),
        sa.Column('token_id', sa.String(length=64), nullable=False),
        sa.Column('token_hash', sa.Text(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('token_id', name='uq_access_tokens_token_id'),
        sa.CheckConstraint("realm in ('admin','user')", name='ck_access_tokens_realm'),
    )
    op.create_index('idx_access_tokens_principal', 'access_tokens', ['realm', 'principal_id'])


def downgrade() -> None:
    op.drop_index('idx_access_tokens_principal', table_name='access_tokens')
    op.drop_table('access_tokens')
    op.drop_index('idx_items_storage_id', table_name='items')
    op.drop_table('items')
    op.drop_table('storages')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_index('ix_admins_email', table_name='admins')
    op.drop_table('admins')
