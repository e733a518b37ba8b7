import pytest

from trainer.progression import (
    ExerciseMode,
    NotEligibleForIncrease,
    PerformanceNotFound,
    ProgressionState,
    confirm_weight_increase,
    evaluate_exercise,
    record_performance,
    summarize_session,
    total_weight_lifted,
)


def evaluated(exercise_id, mode, rounds, previous=None, target_reps=10):
    current = record_performance(
        exercise_id, mode, target_rounds=3, target_reps=target_reps, target_weight=50, rounds=rounds,
    )
    return evaluate_exercise(current, previous)


class FakeStore:
    """In-memory stand-in for the prescription store."""
    def __init__(self, performances):
        self.performances = performances
        self.prescriptions = {}
        self.writes = []

    def get_session_performance(self, session_id, exercise_id, user_id):
        return self.performances.get((session_id, exercise_id, user_id))

    def save_prescription(self, user_id, exercise_id, weight, *, session_id):
        self.prescriptions[(user_id, exercise_id)] = weight
        self.writes.append(weight)
        return weight


def test_empty_session():
    s = summarize_session([], None)
    assert s.total_weight_lifted == 0
    assert s.exercises_completed == 0
    assert s.weight_lifted_improvement is None
    assert s.exercises == ()


def test_only_rep_volume_counts_towards_weight_lifted():
    squat = evaluated(1, ExerciseMode.REPS, [{"round": 1, "weight": 50, "reps": 10}])
    plank = evaluated(2, ExerciseMode.TIME, [{"round": 1, "weight": 0, "time": 60}], target_reps=60)
    carry = evaluated(3, ExerciseMode.DISTANCE, [{"round": 1, "weight": 24, "distance": 40}], target_reps=40)
    assert summarize_session([squat, plank, carry]).total_weight_lifted == 500


def test_weight_lifted_sums_every_round():
    squat = evaluated(1, ExerciseMode.REPS, [
        {"round": 1, "weight": 50, "reps": 10},
        {"round": 2, "weight": 50, "reps": 8},
        {"round": 3, "weight": 40, "reps": 10},
    ])
    assert total_weight_lifted([squat]) == 500 + 400 + 400


def test_zero_previous_total_gives_no_improvement_figure():
    squat = evaluated(1, ExerciseMode.REPS, [{"round": 1, "weight": 50, "reps": 10}])
    assert summarize_session([squat], 0).weight_lifted_improvement is None


def test_improvement_percentage_against_previous_total():
    squat = evaluated(1, ExerciseMode.REPS, [{"round": 1, "weight": 50, "reps": 10}])
    assert summarize_session([squat], 400).weight_lifted_improvement == pytest.approx(25.0)


def test_counts():
    previous = record_performance(
        1, ExerciseMode.REPS, target_rounds=3, target_reps=10, target_weight=50,
        rounds=[{"round": 1, "weight": 50, "reps": 9}],
    )
    reached = evaluated(1, ExerciseMode.REPS, [{"round": 1, "weight": 50, "reps": 10}], previous=previous)
    missed = evaluated(2, ExerciseMode.REPS, [{"round": 1, "weight": 50, "reps": 6}])
    abandoned = evaluated(3, ExerciseMode.REPS, [])

    s = summarize_session([reached, missed, abandoned], None, total_duration=1800)
    assert s.exercises_completed == 2
    assert s.ready_to_progress == 1
    assert s.personal_bests == 1
    assert s.total_duration == 1800
    assert [e.exercise_id for e in s.exercises] == [1, 2, 3]


def test_confirming_twice_stores_the_same_weight():
    perf = evaluated(1, ExerciseMode.REPS, [{"round": 1, "weight": 101, "reps": 10}])
    assert perf.state is ProgressionState.PENDING_CONFIRMATION
    store = FakeStore({(9, 1, 4): perf})

    first = confirm_weight_increase(store, exercise_id=1, user_id=4, session_id=9)
    second = confirm_weight_increase(store, exercise_id=1, user_id=4, session_id=9)

    assert first == second == 107.5
    assert store.prescriptions == {(4, 1): 107.5}
    assert store.writes == [107.5, 107.5]


def test_confirming_without_reaching_target_is_refused():
    perf = evaluated(1, ExerciseMode.REPS, [{"round": 1, "weight": 100, "reps": 9}])
    store = FakeStore({(9, 1, 4): perf})
    with pytest.raises(NotEligibleForIncrease):
        confirm_weight_increase(store, exercise_id=1, user_id=4, session_id=9)
    assert store.prescriptions == {}


def test_confirming_unknown_performance():
    with pytest.raises(PerformanceNotFound):
        confirm_weight_increase(FakeStore({}), exercise_id=1, user_id=4, session_id=9)
