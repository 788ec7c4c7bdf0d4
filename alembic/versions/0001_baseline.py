"""Baseline migration - users, projects and volunteer activity

Revision ID: 0001_baseline
Revises:
Create Date: 2025-03-01

Creates the six platform tables. Written with op.create_table so it runs
on both SQLite and PostgreSQL.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create identity, project and volunteer tables."""

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('organization_name', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "role IN ('corporate', 'ngo', 'volunteer', 'admin')",
            name='ck_users_role_valid',
        ),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )

    # ==========================================================================
    # Projects
    # ==========================================================================
    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('long_description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('funding_goal', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('funding_received', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('impact_type', sa.String(50), nullable=True),
        sa.Column('impact_value', sa.String(255), nullable=True),
        sa.Column('carbon_offset', sa.String(255), nullable=True),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('ngo_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('draft', 'active', 'completed')",
            name='ck_projects_status_valid',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_projects'),
        sa.ForeignKeyConstraint(
            ['ngo_id'], ['users.id'],
            name='fk_projects_ngo_id_users',
        ),
    )
    op.create_index('idx_projects_ngo_id', 'projects', ['ngo_id'])
    op.create_index('idx_projects_status', 'projects', ['status'])

    op.create_table(
        'milestones',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id', name='pk_milestones'),
        sa.ForeignKeyConstraint(
            ['project_id'], ['projects.id'],
            name='fk_milestones_project_id_projects', ondelete='CASCADE',
        ),
    )
    op.create_index('idx_milestones_project_id', 'milestones', ['project_id'])

    op.create_table(
        'project_photos',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('url', sa.String(1000), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_project_photos'),
        sa.ForeignKeyConstraint(
            ['project_id'], ['projects.id'],
            name='fk_project_photos_project_id_projects', ondelete='CASCADE',
        ),
    )
    op.create_index('idx_project_photos_project_id', 'project_photos', ['project_id'])

    # ==========================================================================
    # Volunteer activity
    # ==========================================================================
    op.create_table(
        'registrations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('hours_contributed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('registered_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'project_id', name='uq_registrations_user_project'),
        sa.CheckConstraint('hours_contributed >= 0', name='ck_registrations_hours_non_negative'),
        sa.PrimaryKeyConstraint('id', name='pk_registrations'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_registrations_user_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['project_id'], ['projects.id'],
            name='fk_registrations_project_id_projects', ondelete='CASCADE',
        ),
    )
    op.create_index('idx_registrations_project_id', 'registrations', ['project_id'])

    op.create_table(
        'certificates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=False),
        sa.Column('hours', sa.Integer(), nullable=False),
        sa.Column('issued_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_certificates'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_certificates_user_id_users', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['project_id'], ['projects.id'],
            name='fk_certificates_project_id_projects', ondelete='CASCADE',
        ),
    )
    op.create_index('idx_certificates_user_id', 'certificates', ['user_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table('certificates')
    op.drop_table('registrations')
    op.drop_table('project_photos')
    op.drop_table('milestones')
    op.drop_table('projects')
    op.drop_table('users')
