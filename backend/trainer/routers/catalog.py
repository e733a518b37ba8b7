from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from trainer.db import get_db
from trainer.deps.auth import get_current_user, require_role
from trainer.repositories.catalog_repo import ExerciseRepository, WorkoutRepository
from trainer.schemas.catalog import ExerciseCreate, ExerciseRead, WorkoutCreate, WorkoutRead

router = APIRouter(tags=["catalog"])

@router.post("/exercises", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_role("admin"))])
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db)):
    repo = ExerciseRepository(db)
    if repo.get_by_name(payload.name):
        raise HTTPException(status_code=400, detail="exercise already exists")
    try:
        return repo.create(name=payload.name, mode=payload.mode, instructions=payload.instructions)
    except ValueError as e:
        if str(e) == "exercise_already_exists":
            raise HTTPException(status_code=400, detail="exercise already exists")
        raise

@router.post("/workouts", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_role("admin"))])
def create_workout(payload: WorkoutCreate, db: Session = Depends(get_db)):
    exercises = ExerciseRepository(db)
    missing = [e.exercise_id for e in payload.exercises if exercises.get(e.exercise_id) is None]
    if missing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Exercise not found: {missing}")
    try:
        return WorkoutRepository(db).create(
            name=payload.name,
            description=payload.description,
            exercises=[e.model_dump() for e in payload.exercises],
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/workouts/{workout_id}", response_model=WorkoutRead, dependencies=[Depends(get_current_user)])
def get_workout(workout_id: int, db: Session = Depends(get_db)):
    workout = WorkoutRepository(db).get(workout_id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return workout
