"""FastAPI app exposing the student repository."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator

from rollbook.config.loader import config_from_env
from rollbook.records.loader import RosterLoader
from rollbook.records.models import StudentRecord
from rollbook.store.outcomes import Outcome
from rollbook.store.repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentFields(BaseModel):
    """Editable student fields."""

    name: str = Field(min_length=1)
    phone: str = ""
    address: str = ""
    dsa: int = 0
    os: int = 0
    dbms: int = 0
    cn: int = 0
    total_fee: int = Field(default=0, ge=0)
    fee_paid: int = Field(default=0, ge=0)

    @field_validator("name", "phone", "address", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        # Runs before min_length, so a whitespace-only name counts as empty.
        return value.strip() if isinstance(value, str) else value

    def to_record(self, roll: int) -> StudentRecord:
        return StudentRecord(roll=roll, **self.model_dump(exclude={"roll"}))


class StudentCreate(StudentFields):
    """Request payload for adding a student."""

    roll: int

    def to_record(self, roll: int | None = None) -> StudentRecord:
        return super().to_record(self.roll if roll is None else roll)


class StudentOut(BaseModel):
    """Stored student, including derived fields."""

    roll: int
    name: str
    phone: str
    address: str
    dsa: int
    os: int
    dbms: int
    cn: int
    total: int
    percentage: float
    total_fee: int
    fee_paid: int
    fee_left: int


class RankedStudentOut(BaseModel):
    """Leaderboard row."""

    rank: int
    student: StudentOut


class FeePayment(BaseModel):
    """Request payload for recording a fee payment."""

    amount: int


class StatsOut(BaseModel):
    """Roster summary."""

    count: int
    top_total: int
    average_percentage: float
    fees_due: int


class OutcomeOut(BaseModel):
    """Result of a mutation."""

    outcome: Outcome
    size: int


app = FastAPI(title="Rollbook", version="0.1.0")


def get_cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env."""
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*").strip()
    if raw == "*":
        return ["*"]
    return [item.strip() for item in raw.split(",") if item.strip()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_repository() -> StudentRepository:
    """Return the process-wide repository, configured and seeded from env."""
    repository = StudentRepository(config=config_from_env())

    roster_csv = os.getenv("ROLLBOOK_ROSTER_CSV", "").strip()
    if roster_csv:
        counts = repository.add_many(RosterLoader().load_records(roster_csv))
        logger.info("Seeded roster from %s: %s", roster_csv, counts)
    return repository


def to_student_out(record: StudentRecord) -> StudentOut:
    return StudentOut.model_validate(record.as_dict())


def require_found(record: StudentRecord | None, roll: int) -> StudentRecord:
    if record is None:
        raise HTTPException(status_code=404, detail=f"student {roll} not found")
    return record


def raise_for_outcome(outcome: Outcome, roll: int | None = None) -> None:
    """Translate a rejected outcome into an HTTP error."""
    if outcome.ok:
        return
    if outcome is Outcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"student {roll} not found")
    if outcome is Outcome.DUPLICATE_KEY:
        raise HTTPException(status_code=409, detail=f"roll {roll} already exists")
    if outcome is Outcome.INVALID_SCORES:
        raise HTTPException(status_code=422, detail="subject marks out of range")
    raise HTTPException(status_code=409, detail=outcome.value.replace("_", " "))


@app.get("/api/students", response_model=list[StudentOut])
def list_students() -> list[StudentOut]:
    """List students in stored order."""
    return [to_student_out(record) for record in get_repository().records()]


@app.post("/api/students", response_model=StudentOut, status_code=201)
def add_student(payload: StudentCreate) -> StudentOut:
    """Add a student; rejects duplicate rolls."""
    repository = get_repository()
    record = payload.to_record()
    raise_for_outcome(repository.add(record), payload.roll)
    return to_student_out(record)


@app.get("/api/students/{roll}", response_model=StudentOut)
def get_student(roll: int) -> StudentOut:
    """Look up a student by roll."""
    return to_student_out(require_found(get_repository().find(roll), roll))


@app.put("/api/students/{roll}", response_model=StudentOut)
def update_student(roll: int, payload: StudentFields) -> StudentOut:
    """Replace a student's record."""
    record = payload.to_record(roll)
    raise_for_outcome(get_repository().update(record), roll)
    return to_student_out(record)


@app.delete("/api/students/{roll}", response_model=OutcomeOut)
def delete_student(roll: int) -> OutcomeOut:
    """Remove a student."""
    repository = get_repository()
    outcome = repository.remove(roll)
    raise_for_outcome(outcome, roll)
    return OutcomeOut(outcome=outcome, size=len(repository))


@app.post("/api/students/{roll}/fees", response_model=StudentOut)
def pay_fee(roll: int, payload: FeePayment) -> StudentOut:
    """Record a fee payment."""
    repository = get_repository()
    raise_for_outcome(repository.pay_fee(roll, payload.amount), roll)
    return to_student_out(require_found(repository.find(roll), roll))


@app.get("/api/leaderboard", response_model=list[RankedStudentOut])
def leaderboard() -> list[RankedStudentOut]:
    """Full ranking, best first."""
    return [
        RankedStudentOut(rank=entry.rank, student=to_student_out(entry.record))
        for entry in get_repository().standings()
    ]


@app.get("/api/leaderboard/top", response_model=list[StudentOut])
def top_students(k: int = Query(default=3, ge=0)) -> list[StudentOut]:
    """The k best students."""
    return [to_student_out(record) for record in get_repository().top_k(k)]


@app.get("/api/topper", response_model=StudentOut)
def topper() -> StudentOut:
    """The single best student."""
    record = get_repository().topper()
    if record is None:
        raise HTTPException(status_code=404, detail="no students yet")
    return to_student_out(record)


@app.post("/api/sort", response_model=OutcomeOut)
def sort_students() -> OutcomeOut:
    """Store students in ranked order."""
    repository = get_repository()
    return OutcomeOut(outcome=repository.sort_persist(), size=len(repository))


@app.post("/api/undo", response_model=OutcomeOut)
def undo() -> OutcomeOut:
    """Roll back the last change."""
    repository = get_repository()
    outcome = repository.undo()
    raise_for_outcome(outcome)
    return OutcomeOut(outcome=outcome, size=len(repository))


@app.post("/api/redo", response_model=OutcomeOut)
def redo() -> OutcomeOut:
    """Reapply the last undone change."""
    repository = get_repository()
    outcome = repository.redo()
    raise_for_outcome(outcome)
    return OutcomeOut(outcome=outcome, size=len(repository))


@app.get("/api/stats", response_model=StatsOut)
def stats() -> StatsOut:
    """Head count, top score, average percentage and fees due."""
    summary = get_repository().stats()
    return StatsOut(
        count=summary.count,
        top_total=summary.top_total,
        average_percentage=summary.average_percentage,
        fees_due=summary.fees_due,
    )
