"""Application constants."""

# Workout log list with ?recent=true
RECENT_WORKOUT_LOGS = 5

# Rest timer quick adjustments (seconds)
REST_TIMER_ADJUST_STEPS = (-15, 15, 30)

# Bodyweight high-rep sets: cap the effective load so volume stays realistic
HIGH_REPS_THRESHOLD = 100
HIGH_REPS_MAX_WEIGHT = 50
HIGH_REPS_EFFECTIVE_WEIGHT = 5
HIGH_REPS_EFFECTIVE_REPS = 50

# Estimated load (kg) per muscle group when a log only has template data
ESTIMATED_WEIGHT_BY_MUSCLE_GROUP: dict[str, float] = {
    "Chest": 65,
    "Back": 60,
    "Legs": 100,
    "Shoulders": 30,
    "Biceps": 25,
    "Triceps": 25,
    "Abs": 0,
}
DEFAULT_ESTIMATED_WEIGHT = 50
