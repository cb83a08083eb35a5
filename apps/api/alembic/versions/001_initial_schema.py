"""initial schema: users, workout catalog, sessions, challenges, favorites

Revision ID: 001
Revises: 
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users (ids come from Supabase Auth)
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('first_name', sa.String(), nullable=True),
        sa.Column('last_name', sa.String(), nullable=True),
        sa.Column('profile_image_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('email'),
    )

    # Workout catalog
    op.create_table(
        'workouts',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('video_url', sa.String(), nullable=False),
        sa.Column('vimeo_id', sa.String(), nullable=True),
        sa.Column('thumbnail_url', sa.String(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(), nullable=False),
        sa.Column('calories', sa.Integer(), nullable=True),
        sa.Column('equipment', sa.Text(), nullable=True),
        sa.Column('instructor', sa.String(), nullable=True),
        sa.Column('rating', sa.Numeric(3, 2), nullable=True),
        sa.Column('day_number', sa.Integer(), nullable=True),
        sa.Column('week_number', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_workouts_day_number', 'workouts', ['day_number'])

    op.create_table(
        'exercises',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('muscle_groups', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )

    op.create_table(
        'workout_exercises',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('workout_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workouts.id'), nullable=False),
        sa.Column('exercise_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('exercises.id'), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('rest_time', sa.Integer(), nullable=True),
    )
    op.create_index('ix_workout_exercises_workout_id', 'workout_exercises', ['workout_id'])

    # Sessions and logged sets
    op.create_table(
        'user_workout_sessions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('workout_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workouts.id'), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('calories_burned', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_user_workout_sessions_user_id', 'user_workout_sessions', ['user_id'])
    op.create_index('ix_user_workout_sessions_user_started', 'user_workout_sessions', ['user_id', 'started_at'])

    op.create_table(
        'exercise_sets',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('session_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('user_workout_sessions.id'), nullable=False),
        sa.Column('exercise_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('exercises.id'), nullable=True),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Numeric(5, 2), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('completed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_exercise_sets_session_id', 'exercise_sets', ['session_id'])

    op.create_table(
        'user_progress',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('total_workouts', sa.Integer(), server_default='0', nullable=False),
        sa.Column('total_calories', sa.Integer(), server_default='0', nullable=False),
        sa.Column('workout_streak', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('user_id', name='uq_user_progress_user'),
    )

    # 90-day challenges
    op.create_table(
        'user_challenges',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('current_day', sa.Integer(), server_default='1', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('completed_days', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('paused_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_user_challenges_user_id', 'user_challenges', ['user_id'])
    op.create_index('ix_user_challenges_user_active', 'user_challenges', ['user_id', 'is_active'])
    op.create_index(
        'uq_user_challenges_one_active',
        'user_challenges',
        ['user_id'],
        unique=True,
        postgresql_where=sa.text('is_active'),
    )

    op.create_table(
        'favorite_workouts',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('workout_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('workouts.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('user_id', 'workout_id', name='uq_favorite_workouts_user_workout'),
    )


def downgrade() -> None:
    op.drop_table('favorite_workouts')
    op.drop_index('uq_user_challenges_one_active', table_name='user_challenges')
    op.drop_index('ix_user_challenges_user_active', table_name='user_challenges')
    op.drop_index('ix_user_challenges_user_id', table_name='user_challenges')
    op.drop_table('user_challenges')
    op.drop_table('user_progress')
    op.drop_index('ix_exercise_sets_session_id', table_name='exercise_sets')
    op.drop_table('exercise_sets')
    op.drop_index('ix_user_workout_sessions_user_started', table_name='user_workout_sessions')
    op.drop_index('ix_user_workout_sessions_user_id', table_name='user_workout_sessions')
    op.drop_table('user_workout_sessions')
    op.drop_index('ix_workout_exercises_workout_id', table_name='workout_exercises')
    op.drop_table('workout_exercises')
    op.drop_table('exercises')
    op.drop_index('ix_workouts_day_number', table_name='workouts')
    op.drop_table('workouts')
    op.drop_table('users')
