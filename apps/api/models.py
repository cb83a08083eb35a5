from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, Numeric, Text, String, Index, UniqueConstraint, JSON, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func, text
from core.database import Base
import uuid

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite test database)
JSONList = JSON().with_variant(JSONB(), "postgresql")


class User(Base):
    """
    Application user, mirrored from Supabase Auth.

    `id` is the Supabase auth.users id; rows are upserted from token claims
    on every authenticated request.
    """
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    sessions = relationship("WorkoutSession", back_populates="user", lazy="dynamic")
    challenges = relationship("UserChallenge", back_populates="user", lazy="dynamic")


class Workout(Base):
    """
    Catalog entry: one Vimeo-hosted workout video.

    `day_number` places the workout on the 90-day schedule. It is intended to be
    unique but bulk title/video updates can leave duplicates, so lookups by day
    take the oldest row.
    """
    __tablename__ = "workouts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    video_url = Column(String, nullable=False)  # Full Vimeo URL or bare video ID
    vimeo_id = Column(String, nullable=True)  # Extracted ID used for embedding
    thumbnail_url = Column(String, nullable=True)
    duration = Column(Integer, nullable=False, default=1800)  # seconds
    difficulty = Column(String, nullable=False)  # beginner, intermediate, advanced
    calories = Column(Integer, default=200)
    equipment = Column(Text, nullable=True)
    instructor = Column(String, nullable=True)
    rating = Column(Numeric(3, 2), default=4.5)
    day_number = Column(Integer, nullable=True)  # 1-90
    week_number = Column(Integer, nullable=True)  # 1-13
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    workout_exercises = relationship(
        "WorkoutExercise",
        back_populates="workout",
        order_by="WorkoutExercise.order_index",
    )

    __table_args__ = (
        Index("ix_workouts_day_number", "day_number"),
    )


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    muscle_groups = Column(JSONList, nullable=False, default=list)
    instructions = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class WorkoutExercise(Base):
    """Ordered exercise within a workout."""
    __tablename__ = "workout_exercises"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    workout_id = Column(Uuid(as_uuid=True), ForeignKey("workouts.id"), nullable=False, index=True)
    exercise_id = Column(Uuid(as_uuid=True), ForeignKey("exercises.id"), nullable=False)
    order_index = Column(Integer, nullable=False)
    sets = Column(Integer, nullable=True)
    reps = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds
    rest_time = Column(Integer, nullable=True)  # seconds

    workout = relationship("Workout", back_populates="workout_exercises")
    exercise = relationship("Exercise", lazy="joined")


class WorkoutSession(Base):
    """One attempt at a workout. Active while completed_at is NULL."""
    __tablename__ = "user_workout_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    workout_id = Column(Uuid(as_uuid=True), ForeignKey("workouts.id"), nullable=True)
    started_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    duration = Column(Integer, nullable=True)  # actual duration in seconds
    calories_burned = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="sessions")
    exercise_sets = relationship("ExerciseSet", back_populates="session", order_by="ExerciseSet.set_number")

    __table_args__ = (
        Index("ix_user_workout_sessions_user_started", "user_id", "started_at"),
    )


class ExerciseSet(Base):
    __tablename__ = "exercise_sets"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid(as_uuid=True), ForeignKey("user_workout_sessions.id"), nullable=False, index=True)
    exercise_id = Column(Uuid(as_uuid=True), ForeignKey("exercises.id"), nullable=True)
    set_number = Column(Integer, nullable=False)
    weight = Column(Numeric(5, 2), nullable=True)
    reps = Column(Integer, nullable=True)
    duration = Column(Integer, nullable=True)  # seconds, for time-based exercises
    completed = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    session = relationship("WorkoutSession", back_populates="exercise_sets")


class UserProgress(Base):
    """Running totals for the progress page. One row per user."""
    __tablename__ = "user_progress"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)  # last update
    total_workouts = Column(Integer, default=0, nullable=False)
    total_calories = Column(Integer, default=0, nullable=False)
    workout_streak = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_user_progress_user"),
    )


class UserChallenge(Base):
    """
    A user's run through the 90-day program.

    - At most one row per user has is_active = true.
    - current_day is a cache; readers recompute it from start_date.
    - completed_days is a sorted JSON array of distinct day numbers in [1, 90].
    - completed_at is set once, when the challenge completes.
    - paused_at is reserved; nothing reads or writes it yet.
    """
    __tablename__ = "user_challenges"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    start_date = Column(DateTime(timezone=True), nullable=False)
    current_day = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)
    completed_days = Column(JSONList, nullable=False, default=list)
    paused_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="challenges")

    __table_args__ = (
        Index("ix_user_challenges_user_active", "user_id", "is_active"),
        # One in-progress challenge per user; finished rows are unconstrained
        Index(
            "uq_user_challenges_one_active",
            "user_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )


class FavoriteWorkout(Base):
    __tablename__ = "favorite_workouts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    workout_id = Column(Uuid(as_uuid=True), ForeignKey("workouts.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    workout = relationship("Workout", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "workout_id", name="uq_favorite_workouts_user_workout"),
    )
