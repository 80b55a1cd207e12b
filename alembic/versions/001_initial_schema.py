"""Initial registry schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Create assets table
    op.create_table(
        'assets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('tax_dec_no', sa.Text(), nullable=True),
        sa.Column('declared_owner', sa.Text(), nullable=True),
        sa.Column('market_value', sa.Text(), nullable=True),
        sa.Column('assessed_value', sa.Text(), nullable=True),
        sa.Column('car_status', sa.Text(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('tax_declaration_no', sa.Text(), nullable=True),
        sa.Column('tct_no', sa.Text(), nullable=True),
        sa.Column('area_per_sq_m', sa.Text(), nullable=True),
        sa.Column('location_of_property', sa.Text(), nullable=True),
        sa.Column('barangay', sa.Text(), nullable=True),
        sa.Column('bidder', sa.Text(), nullable=True),
        sa.Column('auction_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('date_of_certification_of_sale', sa.DateTime(timezone=True), nullable=True),
        sa.Column('entry_no', sa.Text(), nullable=True),
        sa.Column('details_short_update_log', sa.Text(), nullable=True),
        sa.Column('location_lat', sa.Float(), nullable=False),
        sa.Column('location_lng', sa.Float(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('assets_name_idx', 'assets', ['name'], unique=False)
    op.create_index('assets_status_idx', 'assets', ['status'], unique=False)
    op.create_index('assets_created_at_idx', 'assets', ['created_at'], unique=False)

    # Create projects table
    op.create_table(
        'projects',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='planning'),
        sa.Column('asset_id', sa.Uuid(), nullable=True),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('projects_name_idx', 'projects', ['name'], unique=False)
    op.create_index('projects_status_idx', 'projects', ['status'], unique=False)
    op.create_index('projects_created_at_idx', 'projects', ['created_at'], unique=False)
    op.create_index('ix_projects_asset_id', 'projects', ['asset_id'], unique=False)

    # Create cases table
    op.create_table(
        'cases',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('rtc', sa.Text(), nullable=False),
        sa.Column('case_no', sa.Text(), nullable=False),
        sa.Column('last_updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('judge', sa.Text(), nullable=True),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('asset_id', sa.Uuid(), nullable=True),
        sa.Column('project_id', sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('cases_rtc_idx', 'cases', ['rtc'], unique=False)
    op.create_index('cases_case_no_idx', 'cases', ['case_no'], unique=False)
    op.create_index('cases_judge_idx', 'cases', ['judge'], unique=False)
    op.create_index('ix_cases_asset_id', 'cases', ['asset_id'], unique=False)
    op.create_index('ix_cases_project_id', 'cases', ['project_id'], unique=False)

    # Create notes table
    op.create_table(
        'notes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('asset_id', sa.Uuid(), nullable=True),
        sa.Column('project_id', sa.Uuid(), nullable=True),
        sa.Column('case_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['case_id'], ['cases.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('notes_created_at_idx', 'notes', ['created_at'], unique=False)
    op.create_index('ix_notes_asset_id', 'notes', ['asset_id'], unique=False)
    op.create_index('ix_notes_project_id', 'notes', ['project_id'], unique=False)
    op.create_index('ix_notes_case_id', 'notes', ['case_id'], unique=False)

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    op.drop_index('ix_notes_case_id', table_name='notes')
    op.drop_index('ix_notes_project_id', table_name='notes')
    op.drop_index('ix_notes_asset_id', table_name='notes')
    op.drop_index('notes_created_at_idx', table_name='notes')
    op.drop_table('notes')

    op.drop_index('ix_cases_project_id', table_name='cases')
    op.drop_index('ix_cases_asset_id', table_name='cases')
    op.drop_index('cases_judge_idx', table_name='cases')
    op.drop_index('cases_case_no_idx', table_name='cases')
    op.drop_index('cases_rtc_idx', table_name='cases')
    op.drop_table('cases')

    op.drop_index('ix_projects_asset_id', table_name='projects')
    op.drop_index('projects_created_at_idx', table_name='projects')
    op.drop_index('projects_status_idx', table_name='projects')
    op.drop_index('projects_name_idx', table_name='projects')
    op.drop_table('projects')

    op.drop_index('assets_created_at_idx', table_name='assets')
    op.drop_index('assets_status_idx', table_name='assets')
    op.drop_index('assets_name_idx', table_name='assets')
    op.drop_table('assets')
