import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date as Date
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from gradetrack.config.catalog import (
    FINALS_ENTRIES,
    FINALS_PERIOD,
    NORMAL_MODULES,
    OVERVIEW_SUBJECTS,
    PERIOD_SUBJECTS,
    PRACTICAL_MODULE,
    UK_MODULES,
)
from gradetrack.config.settings import settings
from gradetrack.core import regular, stats, vocational
from gradetrack.core.records import Adjustment, Grade, Program
from gradetrack.services.validation import ValidationError, validate_collections
from gradetrack.state.gradebook_state import GradebookState


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting %s", settings.app_title)
    yield


app = FastAPI(title=settings.app_title, version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class GradePayload(BaseModel):
    id: Optional[str] = None
    value: float
    weight: float = 1.0
    description: str = ""
    date: Optional[Date] = None
    semester: int
    subject: str
    school: Program = Program.REGULAR


class AdjustmentPayload(BaseModel):
    id: Optional[str] = None
    value: float
    semester: int
    subject: str
    school: Program = Program.REGULAR


class GradebookPayload(BaseModel):
    grades: List[GradePayload] = Field(default_factory=list)
    adjustments: List[AdjustmentPayload] = Field(default_factory=list)


def _to_state(payload: GradebookPayload) -> GradebookState:
    grades = [
        Grade(
            value=g.value,
            weight=g.weight,
            period=g.semester,
            subject=g.subject,
            program=g.school,
            description=g.description,
            date=g.date,
            id=g.id,
        )
        for g in payload.grades
    ]
    adjustments = [
        Adjustment(value=a.value, period=a.semester, subject=a.subject, program=a.school, id=a.id)
        for a in payload.adjustments
    ]
    try:
        validate_collections(grades, adjustments)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return GradebookState(grades=grades, adjustments=adjustments)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/regular/semesters/{semester}")
def semester_summary(semester: int, payload: GradebookPayload) -> Dict:
    if semester not in PERIOD_SUBJECTS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invalid semester")
    state = _to_state(payload)
    semester_status = state.semester_status(semester)
    return {
        "semester": semester,
        "subjects": [
            {
                "subject": subject,
                "raw_average": state.raw_subject_average(semester, subject),
                "average": state.subject_average(semester, subject),
                "adjustment": state.adjustment_for(Program.REGULAR, semester, subject),
            }
            for subject in PERIOD_SUBJECTS[semester]
        ],
        "average": state.semester_average(semester),
        "status": asdict(semester_status) if semester_status else None,
    }


@app.post("/regular/finals")
def finals_summary(payload: GradebookPayload) -> Dict:
    state = _to_state(payload)
    return {
        "semester": FINALS_PERIOD,
        "subjects": [
            {"subject": subject, "grade": regular.finals_exam_grade(state.grades, subject)}
            for subject in FINALS_ENTRIES
        ],
        "average": state.finals_average(),
    }


@app.post("/regular/overview")
def overview_summary(payload: GradebookPayload) -> Dict:
    state = _to_state(payload)
    overview_status = state.overview_status()
    return {
        "subjects": [
            {"subject": subject, **asdict(state.final_subject_grade(subject))} for subject in OVERVIEW_SUBJECTS
        ],
        "overall_average": state.overall_average(),
        "status": asdict(overview_status) if overview_status else None,
    }


def _module_rows(state: GradebookState, modules: Tuple[str, ...]) -> List[Dict]:
    return [
        {
            "module": module,
            "raw_average": vocational.module_raw_average(state.grades, state.adjustments, module),
            "average": vocational.module_average(state.grades, state.adjustments, module),
        }
        for module in modules
    ]


@app.post("/vocational/summary")
def vocational_summary(payload: GradebookPayload) -> Dict:
    state = _to_state(payload)
    logger.debug("Vocational summary over %d grades", len(state.vocational_grades))
    return {
        "normal_modules": _module_rows(state, NORMAL_MODULES),
        "uk_modules": _module_rows(state, UK_MODULES),
        "practical_module": PRACTICAL_MODULE,
        "status": asdict(state.vocational_status()),
    }


@app.post("/stats")
def stats_summary(payload: GradebookPayload) -> Dict:
    state = _to_state(payload)
    return {
        "summary": asdict(stats.grade_summary(state.grades)),
        "distribution": [{"grade": step, "count": n} for step, n in stats.grade_distribution(state.grades).items()],
        "per_subject": stats.grades_per_subject(state.grades),
        "semester_trend": [
            {"semester": p, "average": avg} for p, avg in stats.semester_trend(state.grades, state.adjustments)
        ],
        "subject_progress": stats.subject_progress(state.grades, state.adjustments),
        "semester_pass_fail": [
            {"semester": p, "status": asdict(s) if s else None}
            for p, s in stats.semester_pass_fail(state.grades, state.adjustments)
        ],
        "grades_over_time": [
            {"date": g.date, "value": g.value, "subject": g.subject} for g in stats.grades_over_time(state.grades)
        ],
    }
