"""create users, registration and file_upload

Revision ID: 3f2a9c1d8b41
Revises:
Create Date: 2026-01-12 10:14:02.518331
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d8b41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # gen_random_uuid() on PostgreSQL < 13
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    op.create_table(
        'users',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('cv_file', sa.LargeBinary(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'registration',
        sa.Column('registration_id', postgresql.UUID(as_uuid=True),
                  server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('full_name', sa.Text(), nullable=False),
        sa.Column('job_title', sa.Text(), nullable=True),
        sa.Column('address_full', sa.Text(), nullable=True),
        sa.Column('whatsapp_number', sa.Text(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('applicant_count', sa.Integer(), server_default=sa.text('1'), nullable=False),
        sa.Column('visa_type', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('applicant_count >= 1', name='ck_registration_applicant_count'),
        sa.PrimaryKeyConstraint('registration_id'),
    )

    op.create_table(
        'file_upload',
        sa.Column('file_id', postgresql.UUID(as_uuid=True),
                  server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('registration_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('file_type', sa.Text(), nullable=False),
        sa.Column('filename', sa.Text(), nullable=False),
        sa.Column('file', sa.LargeBinary(), nullable=False),
        sa.Column('file_size', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['registration_id'], ['registration.registration_id']),
        sa.PrimaryKeyConstraint('file_id'),
    )
    op.create_index(op.f('ix_file_upload_registration_id'), 'file_upload', ['registration_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_file_upload_registration_id'), table_name='file_upload')
    op.drop_table('file_upload')
    op.drop_table('registration')
    op.drop_table('users')
