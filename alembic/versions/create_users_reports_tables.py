"""create users and reports tables

Revision ID: 3b1f6c2a9d40
Revises:
Create Date: 2026-10-17 09:12:41

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f6c2a9d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('nama', sa.String(length=255), nullable=False),
        sa.Column('alamat', sa.String(length=500), nullable=False),
        sa.Column('jabatan', sa.String(length=100), nullable=False),
        sa.Column('nomor_ptps', sa.String(length=50), nullable=False),
        sa.Column('kelurahan', sa.String(length=100), nullable=False),
        sa.Column('kecamatan', sa.String(length=100), nullable=False),
        sa.Column('nomor_hp', sa.String(length=30), nullable=False),
        sa.Column('role', sa.Enum('user', 'admin', name='user_role', native_enum=False, length=20), nullable=False),
        sa.Column('status', sa.Enum('pending', 'approved', name='account_status', native_enum=False, length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    # UNIQUE indexes close the check-then-insert race on registration
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_nomor_ptps', 'users', ['nomor_ptps'], unique=True)
    op.create_index('ix_users_status', 'users', ['status'])

    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('uraian_kejadian', sa.Text(), nullable=False),
        sa.Column('tindak_lanjut_ptps', sa.Text(), nullable=True),
        sa.Column('tindak_lanjut_kpps', sa.Text(), nullable=True),
        sa.Column(
            'status',
            sa.Enum('Terkirim', 'Diterima', 'Diproses', 'Selesai', name='report_status', native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reports_status', 'reports', ['status'])
    op.create_index('ix_reports_created_at', 'reports', ['created_at'])
    op.create_index('ix_reports_user_id_created_at', 'reports', ['user_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_reports_user_id_created_at', table_name='reports')
    op.drop_index('ix_reports_created_at', table_name='reports')
    op.drop_index('ix_reports_status', table_name='reports')
    op.drop_table('reports')
    op.drop_index('ix_users_status', table_name='users')
    op.drop_index('ix_users_nomor_ptps', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
