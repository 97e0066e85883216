"""create_exam_tables

Revision ID: 5b1c9e2d7a40
Revises:
Create Date: 2026-10-18 10:12:37.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5b1c9e2d7a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _json() -> sa.types.TypeEngine:
    return sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """시험 토큰/문제/학생/세션/결과 테이블 생성"""
    op.create_table(
        'exam_tokens',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('token', sa.String(length=32), nullable=False),
        sa.Column('exam_type', sa.String(length=32), nullable=False),
        sa.Column('exam_category', sa.String(length=64), nullable=False),
        sa.Column('difficulty', sa.String(length=32), nullable=False),
        sa.Column('used', sa.Boolean(), nullable=False),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_exam_tokens_token'), 'exam_tokens', ['token'], unique=True)
    op.create_index(op.f('ix_exam_tokens_used'), 'exam_tokens', ['used'], unique=False)

    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.String(length=64), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=False),
        sa.Column('character', sa.String(length=32), nullable=True),
        sa.Column('question', sa.Text(), nullable=True),
        sa.Column('options', _json(), nullable=False),
        sa.Column('correct_answer', sa.Integer(), nullable=False),
        sa.Column('chapter', sa.String(length=16), nullable=True),
        sa.Column('difficulty', sa.String(length=32), nullable=False),
        sa.Column('is_custom', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_questions_question_id'), 'questions', ['question_id'], unique=True)
    op.create_index(op.f('ix_questions_type'), 'questions', ['type'], unique=False)
    op.create_index(op.f('ix_questions_category'), 'questions', ['category'], unique=False)

    op.create_table(
        'students',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('token', sa.String(length=32), nullable=False),
        sa.Column('exam_type', sa.String(length=32), nullable=False),
        sa.Column('exam_category', sa.String(length=64), nullable=False),
        sa.Column('difficulty', sa.String(length=32), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('time_remaining', sa.Integer(), nullable=False),
        sa.Column('current_question', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_students_token'), 'students', ['token'], unique=False)
    op.create_index(op.f('ix_students_status'), 'students', ['status'], unique=False)

    op.create_table(
        'exam_sessions',
        sa.Column('student_id', sa.String(length=36), nullable=False),
        sa.Column('exam_type', sa.String(length=32), nullable=False),
        sa.Column('exam_category', sa.String(length=64), nullable=False),
        sa.Column('difficulty', sa.String(length=32), nullable=False),
        sa.Column('question_ids', _json(), nullable=False),
        sa.Column('answers', _json(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('time_remaining', sa.Integer(), nullable=False),
        sa.Column('current_question', sa.Integer(), nullable=False),
        sa.Column('is_fullscreen', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('student_id'),
    )

    op.create_table(
        'exam_results',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('student_id', sa.String(length=36), nullable=False),
        sa.Column('student_name', sa.String(length=100), nullable=False),
        sa.Column('exam_type', sa.String(length=32), nullable=False),
        sa.Column('exam_category', sa.String(length=64), nullable=False),
        sa.Column('difficulty', sa.String(length=32), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('total_questions', sa.Integer(), nullable=False),
        sa.Column('time_spent', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('answers', _json(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_exam_results_student_id'), 'exam_results', ['student_id'], unique=False)
    op.create_index(op.f('ix_exam_results_completed_at'), 'exam_results', ['completed_at'], unique=False)


def downgrade() -> None:
    """시험 관련 테이블 제거"""
    op.drop_index(op.f('ix_exam_results_completed_at'), table_name='exam_results')
    op.drop_index(op.f('ix_exam_results_student_id'), table_name='exam_results')
    op.drop_table('exam_results')
    op.drop_table('exam_sessions')
    op.drop_index(op.f('ix_students_status'), table_name='students')
    op.drop_index(op.f('ix_students_token'), table_name='students')
    op.drop_table('students')
    op.drop_index(op.f('ix_questions_category'), table_name='questions')
    op.drop_index(op.f('ix_questions_type'), table_name='questions')
    op.drop_index(op.f('ix_questions_question_id'), table_name='questions')
    op.drop_table('questions')
    op.drop_index(op.f('ix_exam_tokens_used'), table_name='exam_tokens')
    op.drop_index(op.f('ix_exam_tokens_token'), table_name='exam_tokens')
    op.drop_table('exam_tokens')
