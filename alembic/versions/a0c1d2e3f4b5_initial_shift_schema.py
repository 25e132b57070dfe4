"""initial_shift_schema

Revision ID: a0c1d2e3f4b5
Revises:
Create Date: 2026-10-19 09:00:00.000000

자격 증명, 프로필, 근무, 결근 테이블 생성.
Create identities, refresh_tokens, users, shifts and absences.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a0c1d2e3f4b5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # identities: 로그인 자격 증명 (username@domain + bcrypt hash)
    op.create_table(
        'identities',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # refresh_tokens: 세션 유지용 토큰 (Refresh tokens backing sessions)
    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('identity_id', UUID(as_uuid=True), sa.ForeignKey('identities.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(512), nullable=False, unique=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_refresh_tokens_identity', 'refresh_tokens', ['identity_id'])

    # users: 프로필, id는 identities.id와 동일 (Profile sharing the identity id)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), sa.ForeignKey('identities.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), server_default='worker', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # shifts: 근무자+날짜당 1건 (one shift per worker per date)
    op.create_table(
        'shifts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('shift_type', sa.String(1), nullable=False),
        sa.Column('status', sa.String(20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'date', name='uq_shift_user_date'),
        sa.CheckConstraint("shift_type IN ('1', '2', '3')", name='ck_shifts_shift_type'),
        sa.CheckConstraint("status IN ('pending', 'approved', 'rejected')", name='ck_shifts_status'),
    )
    op.create_index('ix_shifts_status_date', 'shifts', ['status', 'date'])

    # absences: 결근 기록 (shape only)
    op.create_table(
        'absences',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('shift_id', UUID(as_uuid=True), sa.ForeignKey('shifts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column('replacement_user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', sa.String(20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table('absences')
    op.drop_index('ix_shifts_status_date', table_name='shifts')
    op.drop_table('shifts')
    op.drop_table('users')
    op.drop_index('ix_refresh_tokens_identity', table_name='refresh_tokens')
    op.drop_table('refresh_tokens')
    op.drop_table('identities')
