"""users, catalogue, sessions and progression tables

Revision ID: 4b1d2e7c9a10
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

user_role = sa.Enum('user', 'coach', 'admin', name='user_role')
exercise_mode = sa.Enum('REPS', 'TIME', 'DISTANCE', name='exercise_mode')
progression_state = sa.Enum(
    'RECORDED', 'EVALUATED', 'PENDING_CONFIRMATION', 'CONFIRMED', name='progression_state'
)
measure = sa.Numeric(10, 2)


# revision identifiers, used by Alembic.
revision: str = '4b1d2e7c9a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('role', user_role, nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False, unique=True),
        sa.Column('mode', exercise_mode, nullable=False, server_default='REPS'),
        sa.Column('instructions', sa.Text(), nullable=True),
    )

    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )

    op.create_table(
        'workout_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('target_rounds', sa.Integer(), nullable=False),
        sa.Column('target_reps', measure, nullable=False),
        sa.Column('base_weight', measure, nullable=False),
        sa.UniqueConstraint('workout_id', 'exercise_id'),
    )

    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('started_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )

    op.create_table(
        'exercise_performances',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='RESTRICT'), nullable=False, index=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('target_rounds', sa.Integer(), nullable=False),
        sa.Column('target_reps', measure, nullable=False),
        sa.Column('target_weight', measure, nullable=False),
        sa.Column('target_reached', sa.Boolean(), nullable=False),
        sa.Column('next_workout_weight', measure, nullable=False),
        sa.Column('state', progression_state, nullable=False),
        sa.UniqueConstraint('session_id', 'exercise_id'),
    )

    op.create_table(
        'round_performances',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('performance_id', sa.Integer(), sa.ForeignKey('exercise_performances.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('round', sa.Integer(), nullable=False),
        sa.Column('weight', measure, nullable=False),
        sa.Column('reps', measure, nullable=True),
        sa.Column('time', measure, nullable=True),
        sa.Column('distance', measure, nullable=True),
        sa.UniqueConstraint('performance_id', 'round'),
    )

    op.create_table(
        'exercise_prescriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('weight', measure, nullable=False),
        sa.Column('source_session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='SET NULL'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('user_id', 'exercise_id', name='uq_prescription_user_exercise'),
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('exercise_prescriptions')
    op.drop_table('round_performances')
    op.drop_table('exercise_performances')
    op.drop_table('workout_sessions')
    op.drop_table('workout_exercises')
    op.drop_table('workouts')
    op.drop_table('exercises')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')

    # finally drop enum types (no-op outside PostgreSQL)
    bind = op.get_bind()
    progression_state.drop(bind, checkfirst=True)
    exercise_mode.drop(bind, checkfirst=True)
    user_role.drop(bind, checkfirst=True)
