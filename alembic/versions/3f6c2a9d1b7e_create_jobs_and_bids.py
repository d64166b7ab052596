"""create_jobs_and_bids

Creates the jobs and bids document tables.

Each table stores the client document in a JSON(B) column next to indexed
projection columns. bids.job_id is intentionally not a foreign key.

Revision ID: 3f6c2a9d1b7e
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f6c2a9d1b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

document_type = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'jobs',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('title', sa.String(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('buyer_email', sa.String(), nullable=True),
        sa.Column('document', document_type, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_jobs_title'), 'jobs', ['title'])
    op.create_index(op.f('ix_jobs_category'), 'jobs', ['category'])
    op.create_index(op.f('ix_jobs_deadline'), 'jobs', ['deadline'])
    op.create_index(op.f('ix_jobs_buyer_email'), 'jobs', ['buyer_email'])
    op.create_index('ix_jobs_created_at_id', 'jobs', ['created_at', 'id'])

    op.create_table(
        'bids',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('job_id', sa.String(), nullable=True),
        sa.Column('buyer_email', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('document', document_type, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        # One bid per bidder per job
        sa.UniqueConstraint('email', 'job_id', name='uq_bids_email_job_id'),
    )
    op.create_index(op.f('ix_bids_email'), 'bids', ['email'])
    op.create_index(op.f('ix_bids_job_id'), 'bids', ['job_id'])
    op.create_index(op.f('ix_bids_buyer_email'), 'bids', ['buyer_email'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_bids_buyer_email'), table_name='bids')
    op.drop_index(op.f('ix_bids_job_id'), table_name='bids')
    op.drop_index(op.f('ix_bids_email'), table_name='bids')
    op.drop_table('bids')

    op.drop_index('ix_jobs_created_at_id', table_name='jobs')
    op.drop_index(op.f('ix_jobs_buyer_email'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_deadline'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_category'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_title'), table_name='jobs')
    op.drop_table('jobs')
