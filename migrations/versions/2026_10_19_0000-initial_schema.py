"""Initial schema: users, profiles, confirmation codes, stores, roles, employees, shifts, chat, logs

Revision ID: initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=450), nullable=True),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('access_level', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    # NULL names may repeat, non-NULL names may not
    op.create_index('ix_users_name', 'users', ['name'], unique=True,
                    postgresql_where=sa.text('name IS NOT NULL'),
                    sqlite_where=sa.text('name IS NOT NULL'))

    op.create_table('user_profiles',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('birthday', sa.DateTime(), nullable=True),
        sa.Column('gender', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('marital_status', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('page_preference', sa.Integer(), nullable=False, server_default='5'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('user_id'),
    )

    op.create_table('confirmation_codes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=450), nullable=True),
        sa.Column('expiration', sa.DateTime(), nullable=True),
        sa.Column('used', sa.Boolean(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_confirmation_codes_code', 'confirmation_codes', ['code'], unique=True,
                    postgresql_where=sa.text('code IS NOT NULL'),
                    sqlite_where=sa.text('code IS NOT NULL'))
    op.create_index(op.f('ix_confirmation_codes_user_id'), 'confirmation_codes', ['user_id'], unique=False)

    op.create_table('stores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('zip_code', sa.String(), nullable=True),
        sa.Column('country', sa.String(), nullable=True),
        sa.Column('category', sa.Integer(), nullable=False),
        sa.Column('open_date', sa.DateTime(), nullable=True),
        sa.Column('close_date', sa.DateTime(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_stores_user_id'), 'stores', ['user_id'], unique=False)

    op.create_table('store_employee_roles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('role_level', sa.BigInteger(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_store_employee_roles_user_id'), 'store_employee_roles', ['user_id'], unique=False)

    op.create_table('store_employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('gender', sa.Integer(), nullable=False),
        sa.Column('employment_date', sa.DateTime(), nullable=True),
        sa.Column('termination_date', sa.DateTime(), nullable=True),
        sa.Column('salary', sa.Float(), nullable=False),
        sa.Column('store_employee_role_id', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['store_employee_role_id'], ['store_employee_roles.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_store_employees_store_employee_role_id'), 'store_employees', ['store_employee_role_id'], unique=False)
    op.create_index(op.f('ix_store_employees_user_id'), 'store_employees', ['user_id'], unique=False)

    op.create_table('store_shifts',
        sa.Column('store_id', sa.Integer(), nullable=False),
        sa.Column('store_employee_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['store_employee_id'], ['store_employees.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('store_id', 'store_employee_id'),
    )
    op.create_index(op.f('ix_store_shifts_store_id'), 'store_shifts', ['store_id'], unique=False)
    op.create_index(op.f('ix_store_shifts_store_employee_id'), 'store_shifts', ['store_employee_id'], unique=False)
    op.create_index(op.f('ix_store_shifts_user_id'), 'store_shifts', ['user_id'], unique=False)

    op.create_table('chat_messages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nickname', sa.String(), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_chat_messages_timestamp'), 'chat_messages', ['timestamp'], unique=False)

    op.create_table('user_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('path', sa.String(), nullable=True),
        sa.Column('ip_address', sa.String(), nullable=True),
        sa.Column('user_agent', sa.String(), nullable=True),
        sa.Column('status_code', sa.Integer(), nullable=True),
        sa.Column('query_string', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_logs_timestamp'), 'user_logs', ['timestamp'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_user_logs_timestamp'), table_name='user_logs')
    op.drop_table('user_logs')
    op.drop_index(op.f('ix_chat_messages_timestamp'), table_name='chat_messages')
    op.drop_table('chat_messages')
    op.drop_index(op.f('ix_store_shifts_user_id'), table_name='store_shifts')
    op.drop_index(op.f('ix_store_shifts_store_employee_id'), table_name='store_shifts')
    op.drop_index(op.f('ix_store_shifts_store_id'), table_name='store_shifts')
    op.drop_table('store_shifts')
    op.drop_index(op.f('ix_store_employees_user_id'), table_name='store_employees')
    op.drop_index(op.f('ix_store_employees_store_employee_role_id'), table_name='store_employees')
    op.drop_table('store_employees')
    op.drop_index(op.f('ix_store_employee_roles_user_id'), table_name='store_employee_roles')
    op.drop_table('store_employee_roles')
    op.drop_index(op.f('ix_stores_user_id'), table_name='stores')
    op.drop_table('stores')
    op.drop_index(op.f('ix_confirmation_codes_user_id'), table_name='confirmation_codes')
    op.drop_index('ix_confirmation_codes_code', table_name='confirmation_codes')
    op.drop_table('confirmation_codes')
    op.drop_table('user_profiles')
    op.drop_index('ix_users_name', table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
