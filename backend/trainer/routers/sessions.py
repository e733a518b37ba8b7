from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from trainer.db import get_db
from trainer.deps.auth import can_act_for, get_current_user
from trainer.models import User, WorkoutSession
from trainer.progression import (
    InvalidPerformanceData,
    InvalidWeight,
    NotEligibleForIncrease,
    PerformanceNotFound,
    PreviousSessionLookupFailed,
)
from trainer.repositories.catalog_repo import WorkoutRepository
from trainer.repositories.session_repo import SessionRepository
from trainer.schemas.performance import (
    PlannedExerciseRead,
    PrescriptionRead,
    SessionComplete,
    WorkoutSummaryRead,
)
from trainer.schemas.session import SessionCreate, SessionRead
from trainer.services.progress_service import ProgressService

router = APIRouter(prefix="/sessions", tags=["sessions"])

def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    return ProgressService(db)

def session_for(session_id: int, db: Session, current: User) -> WorkoutSession:
    sess = SessionRepository(db).get(session_id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    # Owner or privileged role
    if not can_act_for(current, sess.user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed for this session")
    return sess

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def start_session(payload: SessionCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    if not WorkoutRepository(db).get(payload.workout_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")
    return SessionRepository(db).create(user_id=current.id, workout_id=payload.workout_id, notes=payload.notes)

@router.get("", response_model=list[SessionRead])
def list_my_sessions(
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return SessionRepository(db).list_by_user(current.id, limit=limit, offset=offset)

@router.get("/{session_id}/plan", response_model=list[PlannedExerciseRead])
def session_plan(
    session_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    service: ProgressService = Depends(get_progress_service),
):
    sess = session_for(session_id, db, current)
    try:
        return service.plan(sess)
    except PreviousSessionLookupFailed as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

@router.post("/{session_id}/complete", response_model=WorkoutSummaryRead)
def complete_session(
    session_id: int,
    payload: SessionComplete,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    service: ProgressService = Depends(get_progress_service),
):
    sess = session_for(session_id, db, current)
    try:
        return service.complete(sess, [e.model_dump() for e in payload.exercises])
    except (InvalidPerformanceData, InvalidWeight) as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except PreviousSessionLookupFailed as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except ValueError as e:
        if str(e) == "session_already_completed":
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Session already completed")
        raise

@router.get("/{session_id}/summary", response_model=WorkoutSummaryRead)
def session_summary(
    session_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    service: ProgressService = Depends(get_progress_service),
):
    sess = session_for(session_id, db, current)
    if sess.ended_at is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not completed")
    try:
        return service.summary(sess)
    except PreviousSessionLookupFailed as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

@router.post("/{session_id}/exercises/{exercise_id}/increase-weight", response_model=PrescriptionRead)
def increase_weight(
    session_id: int,
    exercise_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
    service: ProgressService = Depends(get_progress_service),
):
    sess = session_for(session_id, db, current)
    try:
        weight = service.confirm_increase(sess, exercise_id)
    except PerformanceNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotEligibleForIncrease as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"exercise_id": exercise_id, "weight": weight}
