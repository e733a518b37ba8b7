from .aggregator import confirm_weight_increase, summarize_session, total_weight_lifted
from .calculator import (
    compute_improvement,
    evaluate_exercise,
    evaluate_progression,
    is_personal_best,
    is_target_reached,
    next_workout_weight,
    prescribed_weight,
)
from .errors import (
    InvalidPerformanceData,
    InvalidWeight,
    NotEligibleForIncrease,
    PerformanceNotFound,
    PreviousSessionLookupFailed,
    ProgressionError,
)
from .recorder import record_performance
from .types import (
    ExerciseMode,
    ExercisePerformance,
    Improvement,
    PlannedExercise,
    Progression,
    ProgressionState,
    RoundPerformance,
    WorkoutSessionSummary,
)
