"""Initial schema

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'organizations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False, unique=True),
        sa.Column('industry', sa.String(120)),
        sa.Column('address', sa.String(255)),
        sa.Column('contact_email', sa.String(254)),
        *_timestamps(),
    )
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id')),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('full_name', sa.String(160)),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False, server_default='guest'),
        *_timestamps(),
    )
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])
    op.create_table(
        'requirements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id'), nullable=False),
        sa.Column('raised_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('skills', sa.JSON()),
        sa.Column('years_of_experience', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('number_of_positions', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('price_per_interview', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(20), nullable=False, server_default='Pending'),
        *_timestamps(),
    )
    op.create_index('ix_requirements_organization_id', 'requirements', ['organization_id'])
    op.create_index('ix_requirements_status', 'requirements', ['status'])
    op.create_table(
        'interviewers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), unique=True),
        sa.Column('organization_id', sa.Integer(), sa.ForeignKey('organizations.id')),
        sa.Column('name', sa.String(160), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('skills', sa.JSON()),
        sa.Column('status', sa.String(20), nullable=False, server_default='Active'),
        sa.Column('max_capacity', sa.Integer()),
        *_timestamps(),
    )
    op.create_index('ix_interviewers_email', 'interviewers', ['email'], unique=True)
    op.create_index('ix_interviewers_organization_id', 'interviewers', ['organization_id'])
    op.create_table(
        'candidates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), unique=True),
        sa.Column('full_name', sa.String(160), nullable=False),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('resume_url', sa.String(512)),
        sa.Column('status', sa.String(20), nullable=False, server_default='New'),
        sa.Column('requirement_id', sa.Integer(), sa.ForeignKey('requirements.id', ondelete='SET NULL')),
        *_timestamps(),
    )
    op.create_index('ix_candidates_email', 'candidates', ['email'], unique=True)
    op.create_index('ix_candidates_status', 'candidates', ['status'])
    op.create_table(
        'interviews',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('candidate_id', sa.Integer(), sa.ForeignKey('candidates.id'), nullable=False),
        sa.Column('interviewer_id', sa.Integer(), sa.ForeignKey('interviewers.id'), nullable=False),
        sa.Column('requirement_id', sa.Integer(), sa.ForeignKey('requirements.id'), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='Scheduled'),
        sa.Column('feedback', sa.JSON()),
        sa.Column('version_id', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    for col in ('candidate_id', 'interviewer_id', 'requirement_id', 'scheduled_at', 'status'):
        op.create_index(f'ix_interviews_{col}', 'interviews', [col])
    op.create_table(
        'skills',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(80), nullable=False, unique=True),
        sa.Column('category', sa.String(80), nullable=False, server_default='General'),
        *_timestamps(),
    )
    op.create_table(
        'demo_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(160), nullable=False),
        sa.Column('work_email', sa.String(254), nullable=False),
        sa.Column('phone_number', sa.String(40), nullable=False),
        sa.Column('company_name', sa.String(160), nullable=False),
        sa.Column('job_title', sa.String(120)),
        sa.Column('team_size', sa.String(40)),
        sa.Column('hiring_goals', sa.Text()),
        sa.Column('how_heard', sa.String(120)),
        *_timestamps(),
    )


def downgrade() -> None:
    for table in ('demo_requests', 'skills', 'interviews', 'candidates', 'interviewers',
                  'requirements', 'users', 'organizations'):
        op.drop_table(table)
