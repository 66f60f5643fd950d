"""create student_list, teachers, classlist and attendance

Revision ID: 5b1d0c7e2a94
Revises:
Create Date: 2026-10-19 10:12:40.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '5b1d0c7e2a94'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    conn = op.get_bind()
    return table_name in inspect(conn).get_table_names()


def upgrade() -> None:
    # student_list and classlist were created by hand before migrations existed
    if not table_exists('student_list'):
        op.create_table(
            'student_list',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False, server_default=''),
            sa.Column('password', sa.String(), nullable=True),
            sa.Column('course', sa.Text(), nullable=True),
            sa.Column('level', sa.Text(), nullable=True),
        )
        op.create_index('ix_student_list_id', 'student_list', ['id'])
        op.create_index('ix_student_list_email', 'student_list', ['email'], unique=True)

    if not table_exists('teachers'):
        op.create_table(
            'teachers',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False, server_default=''),
            sa.Column('password', sa.String(), nullable=True),
        )
        op.create_index('ix_teachers_id', 'teachers', ['id'])
        op.create_index('ix_teachers_email', 'teachers', ['email'], unique=True)

    if not table_exists('classlist'):
        op.create_table(
            'classlist',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('class_name', sa.String(), nullable=False),
            sa.Column('level', sa.String(), nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('time', sa.String(), nullable=False, server_default=''),
            sa.Column('meet_link', sa.String(), nullable=True),
            sa.Column('coach', sa.String(), nullable=False, server_default=''),
        )
        op.create_index('ix_classlist_id', 'classlist', ['id'])
        op.create_index('ix_classlist_class_name', 'classlist', ['class_name'])
        op.create_index('ix_classlist_level', 'classlist', ['level'])
        op.create_index('ix_classlist_date', 'classlist', ['date'])

    op.create_table(
        'attendance',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('class_list_id', sa.Integer(), sa.ForeignKey('classlist.id'), nullable=False),
        sa.Column('student_id', sa.Integer(), sa.ForeignKey('student_list.id'), nullable=False),
        sa.Column('status', sa.String(length=1), nullable=False, server_default='P'),
        sa.Column('attendance_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_attendance_id', 'attendance', ['id'])
    op.create_index('ix_attendance_class_list_id', 'attendance', ['class_list_id'])
    op.create_index('ix_attendance_student_id', 'attendance', ['student_id'])


def downgrade() -> None:
    if table_exists('attendance'):
        op.drop_table('attendance')
    # student_list, teachers and classlist may predate this revision (upgrade
    # skips them when present), so they are left in place
