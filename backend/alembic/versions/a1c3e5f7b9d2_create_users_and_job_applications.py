"""create users and job_applications

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 09:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b9d2'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

job_status = sa.Enum(
    "Applied", "Phone Screen", "Interview", "Final Round", "Offer", "Rejected", "Withdrawn",
    name="job_status",
)


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('is_premium', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'job_applications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company', sa.String(255), nullable=False),
        sa.Column('position', sa.String(255), nullable=False),
        sa.Column('job_url', sa.String(1024)),
        sa.Column('salary_range', sa.String(255)),
        sa.Column('location', sa.String(255)),
        sa.Column('job_type', sa.String(50)),
        sa.Column('status', job_status, nullable=False, server_default='Applied'),
        sa.Column('notes', sa.Text()),
        sa.Column('company_notes', sa.Text()),
        sa.Column('interview_notes', sa.Text()),
        sa.Column('ai_questions', sa.JSON()),
        sa.Column('company_research', sa.JSON()),
        sa.Column('personalized_prep', sa.JSON()),
        sa.Column('applied_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_job_applications_user_id', 'job_applications', ['user_id'])

    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        # matches the newest-first listing
        op.execute("""
            CREATE INDEX IF NOT EXISTS ix_job_apps_user_created_at_desc
            ON job_applications (user_id, created_at DESC);
        """)
    else:
        op.create_index("ix_job_apps_user_created_at", "job_applications", ["user_id", "created_at"])


def downgrade():
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        op.execute("DROP INDEX IF EXISTS ix_job_apps_user_created_at_desc;")
    else:
        op.drop_index("ix_job_apps_user_created_at", table_name="job_applications")
    op.drop_index('ix_job_applications_user_id', table_name='job_applications')
    op.drop_table('job_applications')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    job_status.drop(bind, checkfirst=True)
