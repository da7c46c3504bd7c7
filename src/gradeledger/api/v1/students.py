"""
Student API Endpoints

Registration, grade entry, attendance and study-hour updates, deactivation,
prediction and read-only lookups. Mutations need an authorized caller
identity header; reads do not.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, Query, Response, status

from gradeledger.api.dependencies import get_caller, get_ledger
from gradeledger.core.schemas import (
    AttendanceUpdate,
    GradeSubmit,
    LedgerEventSchema,
    MetricsSnapshot,
    PredictionResult,
    StudentCount,
    StudentCreate,
    StudentIdPage,
    StudentSnapshot,
    StudyHoursUpdate,
)
from gradeledger.ledger import StudentLedger

router = APIRouter()


@router.post("/", response_model=StudentSnapshot, status_code=status.HTTP_201_CREATED)
async def register_student(
    student_data: StudentCreate,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> StudentSnapshot:
    """Register a new student, or re-register a deactivated one."""
    return await ledger.register(
        caller,
        student_data.id,
        student_data.name,
        student_data.attendance_percentage,
        student_data.study_hours,
    )


@router.get("/", response_model=StudentIdPage)
async def list_student_ids(
    offset: int = Query(0, description="Position in registration order"),
    limit: int = Query(20, description="Page size (1-100)"),
    ledger: StudentLedger = Depends(get_ledger),
) -> StudentIdPage:
    """List student IDs in registration order.

    Deactivated students are included.
    """
    ids = await ledger.list_ids(offset, limit)
    total = await ledger.count()
    return StudentIdPage(offset=offset, limit=limit, total=total, ids=ids)


@router.get("/count", response_model=StudentCount)
async def count_students(ledger: StudentLedger = Depends(get_ledger)) -> StudentCount:
    """Total registrations ever made (not the number of active students)."""
    return StudentCount(count=await ledger.count())


@router.get("/{student_id}", response_model=StudentSnapshot)
async def get_student(
    student_id: int, ledger: StudentLedger = Depends(get_ledger)
) -> StudentSnapshot:
    """Get an active student by ID."""
    return await ledger.get(student_id)


@router.get("/{student_id}/metrics", response_model=MetricsSnapshot)
async def get_student_metrics(
    student_id: int, ledger: StudentLedger = Depends(get_ledger)
) -> MetricsSnapshot:
    """Get an active student's derived metrics."""
    return await ledger.get_metrics(student_id)


@router.post("/{student_id}/grades", response_model=StudentSnapshot)
async def add_grades(
    student_id: int,
    submission: GradeSubmit,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> StudentSnapshot:
    """Append one grade or a batch of up to 50.

    A batch is all-or-nothing.
    """
    if submission.grades is not None:
        return await ledger.add_grades(caller, student_id, submission.grades)
    return await ledger.add_grade(caller, student_id, submission.grade)  # type: ignore[arg-type]


@router.put("/{student_id}/attendance", response_model=StudentSnapshot)
async def update_attendance(
    student_id: int,
    update: AttendanceUpdate,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> StudentSnapshot:
    """Overwrite attendance. Does not refresh the prediction."""
    return await ledger.update_attendance(caller, student_id, update.attendance_percentage)


@router.put("/{student_id}/study-hours", response_model=StudentSnapshot)
async def update_study_hours(
    student_id: int,
    update: StudyHoursUpdate,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> StudentSnapshot:
    """Overwrite weekly study hours. Does not refresh the prediction."""
    return await ledger.update_study_hours(caller, student_id, update.study_hours)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_student(
    student_id: int,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> Response:
    """Deactivate (soft-delete) a student."""
    await ledger.deactivate(caller, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{student_id}/prediction", response_model=PredictionResult)
async def predict_performance(
    student_id: int,
    caller: str = Depends(get_caller),
    ledger: StudentLedger = Depends(get_ledger),
) -> PredictionResult:
    """Recompute the predicted score, category and confidence."""
    return await ledger.predict(caller, student_id)


@router.get("/{student_id}/events", response_model=list[LedgerEventSchema])
async def list_student_events(
    student_id: int,
    limit: int = Query(100, ge=1, le=500),
    ledger: StudentLedger = Depends(get_ledger),
) -> list[LedgerEventSchema]:
    """Audit trail for a student, oldest first.

    Events of deactivated students stay readable.
    """
    return await ledger.list_events(student_id=student_id, limit=limit)
