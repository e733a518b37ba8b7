# trainer/progression/recorder.py
from __future__ import annotations
import logging
import math
from typing import Any, Iterable, Mapping, Optional, Union

from .errors import InvalidPerformanceData, InvalidWeight
from .types import ExerciseMode, ExercisePerformance, RoundPerformance

logger = logging.getLogger(__name__)

RoundInput = Union[RoundPerformance, Mapping[str, Any]]


def _as_round(raw: RoundInput) -> RoundPerformance:
    if isinstance(raw, RoundPerformance):
        return raw
    try:
        return RoundPerformance(
            round=raw["round"],
            weight=raw.get("weight", 0),
            reps=raw.get("reps"),
            time=raw.get("time"),
            distance=raw.get("distance"),
        )
    except KeyError as e:
        raise InvalidPerformanceData(f"round entry is missing {e.args[0]!r}") from e


def check_weight(value: Any) -> float:
    try:
        w = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidWeight(f"weight must be a number, got {value!r}") from e
    if not math.isfinite(w) or w < 0:
        raise InvalidWeight(f"weight must be finite and non-negative, got {value!r}")
    return w


def _normalize(r: RoundPerformance, mode: ExerciseMode) -> RoundPerformance:
    primary = r.primary_value(mode)
    if primary is None:
        raise InvalidPerformanceData(f"round {r.round} has no {mode.value.lower()} value")
    primary = float(primary)
    if not math.isfinite(primary) or primary < 0:
        raise InvalidPerformanceData(f"round {r.round} has an invalid {mode.value.lower()} value")

    # Only the field matching the mode is kept
    return RoundPerformance(
        round=r.round,
        weight=check_weight(r.weight),
        reps=primary if mode is ExerciseMode.REPS else None,
        time=primary if mode is ExerciseMode.TIME else None,
        distance=primary if mode is ExerciseMode.DISTANCE else None,
    )


def record_performance(
    exercise_id: int,
    mode: ExerciseMode,
    *,
    target_rounds: int,
    target_reps: float,
    target_weight: float,
    rounds: Iterable[RoundInput],
    id: Optional[int] = None,
    name: Optional[str] = None,
) -> ExercisePerformance:
    """
    Validate the rounds submitted for one exercise and build its record.

    Rounds may arrive in any order but, once sorted, must read 1..n with no
    duplicates or gaps, and never exceed ``target_rounds``. The last round
    supplies the representative weight and primary value.
    """
    mode = ExerciseMode(mode)
    if target_rounds < 1:
        raise InvalidPerformanceData("target_rounds must be at least 1")
    target_weight = check_weight(target_weight)

    parsed = sorted((_as_round(r) for r in rounds), key=lambda r: r.round)
    for expected, r in enumerate(parsed, start=1):
        if r.round != expected:
            raise InvalidPerformanceData(
                f"exercise {exercise_id}: expected round {expected}, got {r.round}"
            )
    if len(parsed) > target_rounds:
        raise InvalidPerformanceData(
            f"exercise {exercise_id}: {len(parsed)} rounds recorded, target is {target_rounds}"
        )

    by_round = tuple(_normalize(r, mode) for r in parsed)
    last = by_round[-1] if by_round else None

    perf = ExercisePerformance(
        id=id,
        exercise_id=exercise_id,
        name=name,
        mode=mode,
        target_rounds=target_rounds,
        target_reps=target_reps,
        target_weight=target_weight,
        performance_by_round=by_round,
        weight=last.weight if last else 0,
        reps=(last.reps or 0) if last and mode is ExerciseMode.REPS else 0,
        time=last.time if last else None,
        distance=last.distance if last else None,
    )
    logger.debug("recorded exercise=%s rounds=%d mode=%s", exercise_id, len(by_round), mode.value)
    return perf
