"""initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (table, extra indexed columns) for every owned resource table
OWNED_TABLES = [
    ('crm_companies', []),
    ('crm_contacts', ['company_id']),
    ('crm_leads', ['status']),
    ('crm_deals', ['stage']),
    ('crm_activities', ['contact_id', 'lead_id', 'deal_id']),
    ('email_templates', []),
    ('marketing_lists', []),
    ('marketing_workflows', []),
    ('documents', ['entity_type', 'entity_id']),
    ('branches', []),
    ('categories', []),
    ('items', ['category']),
    ('invoices', ['invoice_number', 'status']),
]


def _owned_columns():
    """id / user_id / created_at / updated_at shared by every owned resource table."""
    return [
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
    ]


def _text(name):
    return sa.Column(name, sa.Text(), nullable=False)


def _str(name, length=255, nullable=False):
    return sa.Column(name, sa.String(length=length), nullable=nullable)


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        _str('name'),
        _str('email', 320),
        _str('hashed_password'),
        _str('business_name'),
        _str('phone'),
        _text('address'),
        sa.Column('currency', sa.String(length=8), nullable=False, server_default='GHS'),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='owner'),
        sa.Column('role_ids', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Create permissions / roles tables (shared, not owned)
    op.create_table(
        'permissions',
        _str('id', 32),
        _str('code', 100),
        _str('name'),
        _text('description'),
        _str('resource', 100),
        _str('action', 50),
        sa.Column('scope', sa.String(length=10), nullable=False, server_default='all'),
        sa.Column('is_system', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code')
    )
    op.create_index(op.f('ix_permissions_code'), 'permissions', ['code'], unique=True)
    op.create_index(op.f('ix_permissions_resource'), 'permissions', ['resource'], unique=False)

    op.create_table(
        'roles',
        _str('id', 32),
        _str('name'),
        _str('code', 100),
        _text('description'),
        sa.Column('permissions', sa.JSON(), nullable=True),
        sa.Column('is_system', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_roles_code'), 'roles', ['code'], unique=True)

    # CRM
    op.create_table(
        'crm_companies',
        *_owned_columns(),
        _str('name'),
        _str('website'),
        _str('phone'),
        _text('address'),
        _str('industry'),
        _text('notes'),
    )
    op.create_table(
        'crm_contacts',
        *_owned_columns(),
        _str('company_id', 32, nullable=True),
        _str('first_name'),
        _str('last_name'),
        _str('email', 320),
        _str('phone'),
        _str('job_title'),
        _str('source'),
        sa.Column('tags', sa.JSON(), nullable=True),
        _text('notes'),
    )
    op.create_table(
        'crm_leads',
        *_owned_columns(),
        _str('name'),
        _str('contact_id', 32, nullable=True),
        _str('company_id', 32, nullable=True),
        _str('email', 320),
        _str('phone'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='new'),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        _str('source'),
        _str('campaign_id', 32, nullable=True),
        _text('notes'),
    )
    op.create_table(
        'crm_deals',
        *_owned_columns(),
        _str('name'),
        _str('contact_id', 32, nullable=True),
        _str('lead_id', 32, nullable=True),
        _str('company_id', 32, nullable=True),
        sa.Column('value', sa.Float(), nullable=False, server_default='0'),
        sa.Column('currency', sa.String(length=8), nullable=False, server_default='GHS'),
        sa.Column('stage', sa.String(length=20), nullable=False, server_default='qualification'),
        sa.Column('expected_close_date', sa.Date(), nullable=True),
        _text('notes'),
    )
    op.create_table(
        'crm_activities',
        *_owned_columns(),
        _str('contact_id', 32, nullable=True),
        _str('lead_id', 32, nullable=True),
        _str('deal_id', 32, nullable=True),
        sa.Column('type', sa.String(length=20), nullable=False),
        _str('title'),
        _text('description'),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        _str('location'),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
    )

    # Marketing
    op.create_table(
        'email_templates',
        *_owned_columns(),
        _str('name'),
        _str('subject', 500),
        _text('body'),
    )
    op.create_table(
        'marketing_lists',
        *_owned_columns(),
        _str('name'),
        sa.Column('type', sa.String(length=10), nullable=False, server_default='static'),
        _text('description'),
        sa.Column('conditions', sa.JSON(), nullable=True),
        sa.Column('contact_count', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_table(
        'marketing_workflows',
        *_owned_columns(),
        _str('name'),
        sa.Column('trigger_type', sa.String(length=20), nullable=False, server_default='manual'),
        sa.Column('trigger_config', sa.JSON(), nullable=True),
        sa.Column('actions', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
    )

    # Documents (content inline, up to 16MB)
    op.create_table(
        'documents',
        *_owned_columns(),
        _str('name'),
        _str('entity_type', 50),
        _str('entity_id', 64),
        _str('mime_type'),
        sa.Column('size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('content', sa.Text().with_variant(mysql.MEDIUMTEXT(), 'mysql'), nullable=True),
        _str('storage_ref', 500),
        sa.Column('uploaded_by', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['uploaded_by'], ['users.id'], ),
    )

    # Organization
    op.create_table(
        'branches',
        *_owned_columns(),
        _str('name'),
        _text('address'),
        _str('phone'),
        _str('email', 320),
        _str('tin', 50),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=10), nullable=False, server_default='active'),
    )

    # Catalog
    op.create_table(
        'categories',
        *_owned_columns(),
        _str('name'),
        _text('description'),
        sa.Column('color', sa.String(length=20), nullable=False, server_default='#3B82F6'),
    )
    op.create_table(
        'items',
        *_owned_columns(),
        _str('name'),
        _text('description'),
        _str('category'),
        sa.Column('category_color', sa.String(length=20), nullable=False, server_default='#3B82F6'),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('unit', sa.String(length=50), nullable=False, server_default='unit'),
        _str('sku', 100),
        sa.Column('tax_rate', sa.Float(), nullable=False, server_default='0'),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='0'),
    )

    # Invoicing
    op.create_table(
        'invoices',
        *_owned_columns(),
        _str('invoice_number', 50),
        sa.Column('invoice_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('bill_from', sa.JSON(), nullable=True),
        sa.Column('bill_to', sa.JSON(), nullable=True),
        sa.Column('items', sa.JSON(), nullable=True),
        _text('notes'),
        sa.Column('payment_terms', sa.String(length=50), nullable=False, server_default='Net 15'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Unpaid'),
        sa.Column('subtotal', sa.Float(), nullable=False, server_default='0'),
        sa.Column('discount_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('grand_total', sa.Float(), nullable=False, server_default='0'),
        sa.Column('amount_paid', sa.Float(), nullable=False, server_default='0'),
        sa.Column('balance_due', sa.Float(), nullable=False, server_default='0'),
    )

    for table, indexed in OWNED_TABLES:
        for column in ['user_id', 'created_at', *indexed]:
            op.create_index(op.f(f'ix_{table}_{column}'), table, [column], unique=False)


def downgrade() -> None:
    # Owned tables first (they reference users); MySQL drops their indexes with the table
    for table, _ in reversed(OWNED_TABLES):
        op.drop_table(table)

    op.drop_index(op.f('ix_roles_code'), table_name='roles')
    op.drop_table('roles')

    op.drop_index(op.f('ix_permissions_resource'), table_name='permissions')
    op.drop_index(op.f('ix_permissions_code'), table_name='permissions')
    op.drop_table('permissions')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
