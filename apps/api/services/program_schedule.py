"""
The 13-week workout schedule and the seed catalog.

Three training blocks: weeks 1-4, 5-8 and 9-13. Week 13 has five workouts,
so the schedule names 89 days; day 90 keeps whatever title it already has.
"""
import math
from typing import Dict, List, Optional

_BLOCK_1_WEEK = ["Total Synergistics", "Agility X", "X3 Yoga", "The Challenge", "CVX", "The Warrior", "Dynamix"]
_BLOCK_2_WEEK = ["Eccentric Upper", "Triometrics", "X3 Yoga", "Eccentric Lower", "Incinerator", "MMX", "Dynamix"]
_BLOCK_3_WEEK_A = ["Decelerator", "Agility X", "The Challenge", "X3 Yoga", "Triometrics", "Total Synergistics", "Dynamix"]
_BLOCK_3_WEEK_B = ["Decelerator", "MMX", "Eccentric Upper", "Triometrics", "Pilates X", "Eccentric Lower", "Dynamix"]

PROGRAM_SCHEDULE: List[str] = (
    _BLOCK_1_WEEK * 3
    + ["Isometrix", "Dynamics", "Accelerator", "Pilates X", "CVX", "X3 Yoga", "Dynamix"]
    + _BLOCK_2_WEEK * 3
    + ["Isometrix", "Dynamix", "Accelerator", "Pilates X", "CVX", "X3 Yoga", "Dynamix"]
    + _BLOCK_3_WEEK_A + _BLOCK_3_WEEK_B + _BLOCK_3_WEEK_A + _BLOCK_3_WEEK_B
    + ["Isometrix", "Accelerator", "Pilates X", "X3 Yoga", "Dynamix"]
)

SEED_WORKOUT_TYPES = ["Strength", "Cardio", "Flexibility", "HIIT"]
SEED_INSTRUCTORS = ["Sarah Johnson", "Mike Chen", "Lisa Rodriguez", "David Kim"]
SEED_VIMEO_IDS = ["916076102", "916076102", "916076102", "916076102"]


def scheduled_title(day_number: int) -> Optional[str]:
    if 1 <= day_number <= len(PROGRAM_SCHEDULE):
        return PROGRAM_SCHEDULE[day_number - 1]
    return None


def week_for_day(day_number: int) -> int:
    return math.ceil(day_number / 7)


def seed_workout_fields(day_number: int) -> Dict:
    """Placeholder catalog entry for a schedule day."""
    type_index = (day_number - 1) % len(SEED_WORKOUT_TYPES)
    workout_type = SEED_WORKOUT_TYPES[type_index]
    vimeo_id = SEED_VIMEO_IDS[type_index]

    if day_number <= 30:
        difficulty = "beginner"
    elif day_number <= 60:
        difficulty = "intermediate"
    else:
        difficulty = "advanced"

    if day_number % 3 == 0:
        equipment = "Dumbbells"
    elif day_number % 2 == 0:
        equipment = "Bodyweight"
    else:
        equipment = "Resistance Bands"

    return {
        "title": f"Day {day_number}: {workout_type} Challenge",
        "description": f"30-minute {workout_type.lower()} workout for day {day_number} of your fitness journey",
        "video_url": f"https://vimeo.com/{vimeo_id}",
        "vimeo_id": vimeo_id,
        "duration": 1800,
        "difficulty": difficulty,
        "calories": 200 + (day_number // 10) * 20,
        "equipment": equipment,
        "instructor": SEED_INSTRUCTORS[type_index],
        "rating": 4.5,
        "day_number": day_number,
        "week_number": week_for_day(day_number),
    }
