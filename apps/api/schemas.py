from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from datetime import datetime
from uuid import UUID
from typing import Optional, List

from services.vimeo import embed_url


class UserResponse(BaseModel):
    id: UUID
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


# --- Workouts ---

class WorkoutBase(BaseModel):
    title: str
    description: Optional[str] = None
    video_url: str
    vimeo_id: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: int = Field(default=1800, ge=0)  # seconds
    difficulty: str = "intermediate"
    calories: Optional[int] = 200
    equipment: Optional[str] = None
    instructor: Optional[str] = None
    rating: Optional[float] = Field(default=4.5, ge=0, le=5)
    day_number: Optional[int] = Field(default=None, ge=1, le=90)
    week_number: Optional[int] = Field(default=None, ge=1, le=13)


class WorkoutCreate(WorkoutBase):
    pass


class WorkoutUpdate(BaseModel):
    """Partial update; unset fields are left alone."""
    title: Optional[str] = None
    description: Optional[str] = None
    video_url: Optional[str] = None
    vimeo_id: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    difficulty: Optional[str] = None
    calories: Optional[int] = None
    equipment: Optional[str] = None
    instructor: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    day_number: Optional[int] = Field(default=None, ge=1, le=90)
    week_number: Optional[int] = Field(default=None, ge=1, le=13)

    @field_validator("title", "video_url", "duration", "difficulty")
    @classmethod
    def reject_null_required(cls, v, info):
        # Omit the field to leave it unchanged; these columns are NOT NULL
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class WorkoutResponse(WorkoutBase):
    id: UUID
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def embed_url(self) -> Optional[str]:
        return embed_url(self.vimeo_id)


class VimeoWorkoutCreate(BaseModel):
    title: str
    vimeo_url: str  # Full Vimeo URL or bare ID
    description: Optional[str] = None
    day_number: Optional[int] = Field(default=None, ge=1, le=90)
    week_number: Optional[int] = Field(default=None, ge=1, le=13)
    difficulty: Optional[str] = None
    instructor: Optional[str] = None
    equipment: Optional[str] = None


class WorkoutBulkUpdate(BaseModel):
    workout_name: str
    vimeo_url: str


class WorkoutGroup(BaseModel):
    title: str
    count: int
    days: List[int]


# --- Exercises ---

class ExerciseCreate(BaseModel):
    name: str
    description: Optional[str] = None
    muscle_groups: List[str] = []
    instructions: Optional[str] = None


class ExerciseResponse(ExerciseCreate):
    id: UUID
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WorkoutExerciseResponse(BaseModel):
    id: UUID
    order_index: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration: Optional[int] = None
    rest_time: Optional[int] = None
    exercise: ExerciseResponse

    model_config = ConfigDict(from_attributes=True)


class WorkoutDetailResponse(WorkoutResponse):
    exercises: List[WorkoutExerciseResponse] = []


# --- Sessions & sets ---

class WorkoutSessionCreate(BaseModel):
    workout_id: Optional[UUID] = None
    notes: Optional[str] = None


class WorkoutSessionComplete(BaseModel):
    duration: Optional[int] = Field(default=None, ge=0)  # seconds
    calories_burned: Optional[int] = Field(default=None, ge=0)


class WorkoutSessionResponse(BaseModel):
    id: UUID
    user_id: UUID
    workout_id: Optional[UUID] = None
    started_at: datetime
    completed_at: Optional[datetime] = None
    duration: Optional[int] = None
    calories_burned: Optional[int] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ExerciseSetCreate(BaseModel):
    session_id: UUID
    exercise_id: Optional[UUID] = None
    set_number: int = Field(ge=1)
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, ge=0)
    completed: bool = False


class ExerciseSetUpdate(BaseModel):
    exercise_id: Optional[UUID] = None
    set_number: Optional[int] = Field(default=None, ge=1)
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, ge=0)
    completed: Optional[bool] = None


class ExerciseSetResponse(BaseModel):
    id: UUID
    session_id: UUID
    exercise_id: Optional[UUID] = None
    set_number: int
    weight: Optional[float] = None
    reps: Optional[int] = None
    duration: Optional[int] = None
    completed: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# --- Progress & favorites ---

class UserProgressResponse(BaseModel):
    total_workouts: int = 0
    total_calories: int = 0
    workout_streak: int = 0
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FavoriteCreate(BaseModel):
    workout_id: UUID


class FavoriteResponse(BaseModel):
    id: UUID
    user_id: UUID
    workout_id: UUID
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FavoriteStatus(BaseModel):
    is_favorited: bool


# --- Challenge ---

class ChallengeResponse(BaseModel):
    id: UUID
    user_id: UUID
    start_date: datetime
    current_day: int
    completed_days: List[int]
    completed_count: int
    days_remaining: int
    is_active: bool
    completed_at: Optional[datetime] = None


class CurrentDayResponse(BaseModel):
    has_active_challenge: bool
    current_day: Optional[int] = None
