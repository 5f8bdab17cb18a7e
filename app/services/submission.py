# app/services/submission.py
"""
Pipeline de envío de una encuesta.

Cada paso recibe el mismo SubmissionContext y, o bien lo completa y deja pasar
al siguiente, o bien lanza SurveyError con su Reason. Los pasos de validación
(hasta _resolve_questions) no escriben nada; a partir de _upsert_employee se
escribe en BD.

El INSERT en responses es la única barrera contra el doble envío: no se hace
SELECT previo, el UNIQUE (survey_id, employee_id) decide. La respuesta y sus
items van en la misma transacción, así que si fallan los items el rollback se
lleva también la fila de responses.

El commit del upsert expira las instancias ORM cargadas; por eso el contexto
guarda ids y flags como valores planos antes de ese paso.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Request
from pydantic import ValidationError
from sqlalchemy import func, insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.choices import SCALE_ORDER
from app.core.errors import Reason, SurveyError
from app.models.employee import Employee
from app.models.response import Response, ResponseItem
from app.models.survey import Department, Question, Survey
from app.schemas.submission import SubmitIn
from app.services.audit import audit_log
from app.services.scoring import (
    demographic_or_none,
    is_valid_employee_code,
    is_valid_score,
    normalize_employee_code,
    score_answer,
)

logger = logging.getLogger(__name__)

SURVEY_STATUS_OPEN = "open"
DUPLICATE_RESPONSE_CONSTRAINT = "uq_response_survey_employee"
# SQLite no expone el nombre del constraint, solo las columnas
_SQLITE_DUPLICATE_COLUMNS = "responses.survey_id, responses.employee_id"

# INSERT ... ON CONFLICT por dialecto (Postgres en prod, SQLite en tests)
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


@dataclass
class SubmissionContext:
    db: Session
    survey_code: str
    body: Any
    request: Optional[Request] = None
    now: Optional[datetime] = None

    payload: Optional[SubmitIn] = None
    employee_code: str = ""
    department_name: str = ""
    survey_id: Optional[int] = None
    department_id: Optional[int] = None
    # question_code -> (question_id, is_reverse)
    questions: dict[str, tuple[int, bool]] = field(default_factory=dict)
    employee_id: Optional[int] = None
    response_id: Optional[int] = None
    items: list[dict[str, int]] = field(default_factory=list)


# -------------------- helpers -------------------- #

def _reject(ctx: SubmissionContext, reason: Reason, question_code: Optional[str] = None) -> SurveyError:
    logger.info(
        "submit %s rechazado: %s (employee=%s question=%s)",
        ctx.survey_code, reason.value, ctx.employee_code or "-", question_code or "-",
    )
    return SurveyError(reason, question_code=question_code)


def _as_utc(value: datetime) -> datetime:
    # SQLite devuelve datetimes naive; se guardan siempre en UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_open(survey: Survey, now: datetime) -> bool:
    if survey.status != SURVEY_STATUS_OPEN:
        return False
    return _as_utc(survey.start_at) <= now <= _as_utc(survey.end_at)


def _insert_items(db: Session, rows: list[dict[str, int]]) -> None:
    db.execute(insert(ResponseItem), rows)


def _is_duplicate_response(exc: IntegrityError) -> bool:
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint is not None:
        return constraint == DUPLICATE_RESPONSE_CONSTRAINT
    return _SQLITE_DUPLICATE_COLUMNS in str(exc.orig)


# -------------------- pasos (en orden) -------------------- #

def _check_shape(ctx: SubmissionContext) -> None:
    try:
        ctx.payload = SubmitIn.model_validate(ctx.body)
    except ValidationError as e:
        logger.info("submit %s: payload inválido (%d errores)", ctx.survey_code, e.error_count())
        raise _reject(ctx, Reason.INVALID_REQUEST)


def _check_employee_code(ctx: SubmissionContext) -> None:
    code = normalize_employee_code(ctx.payload.employee_code)
    if not is_valid_employee_code(code):
        raise _reject(ctx, Reason.INVALID_EMPLOYEE_CODE)
    ctx.employee_code = code


def _check_department_present(ctx: SubmissionContext) -> None:
    name = ctx.payload.department_name.strip()
    if not name:
        raise _reject(ctx, Reason.INVALID_REQUEST)
    ctx.department_name = name


def _check_answers_present(ctx: SubmissionContext) -> None:
    if not ctx.payload.answers:
        raise _reject(ctx, Reason.EMPTY_ANSWERS)


def _check_survey_window(ctx: SubmissionContext) -> None:
    survey = ctx.db.query(Survey).filter(Survey.code == ctx.survey_code).first()
    if not survey:
        raise _reject(ctx, Reason.SURVEY_NOT_FOUND)

    if ctx.now is None:
        ctx.now = datetime.now(timezone.utc)
    if not is_open(survey, ctx.now):
        raise _reject(ctx, Reason.OUTSIDE_WINDOW)
    ctx.survey_id = survey.id


def _resolve_department(ctx: SubmissionContext) -> None:
    dept = (
        ctx.db.query(Department)
        .filter(Department.name == ctx.department_name, Department.is_active.is_(True))
        .first()
    )
    if not dept:
        raise _reject(ctx, Reason.INVALID_DEPARTMENT)
    ctx.department_id = dept.id


def _resolve_questions(ctx: SubmissionContext) -> None:
    answers = ctx.payload.answers
    rows = ctx.db.query(Question).filter(Question.question_code.in_(list(answers.keys()))).all()
    ctx.questions = {
        q.question_code: (q.id, q.is_reverse)
        for q in rows
        if q.is_active and q.scale in SCALE_ORDER
    }

    # Todo se valida antes de escribir: un solo error rechaza el envío completo
    for code, value in answers.items():
        if code not in ctx.questions:
            raise _reject(ctx, Reason.INVALID_QUESTION_CODE, question_code=code)
        if not is_valid_score(value):
            raise _reject(ctx, Reason.INVALID_SCORE, question_code=code)


def _upsert_employee(ctx: SubmissionContext) -> None:
    db = ctx.db
    try:
        insert_fn = _UPSERT_INSERTS.get(db.get_bind().dialect.name, pg_insert)
        stmt = insert_fn(Employee).values(
            employee_code=ctx.employee_code,
            department_id=ctx.department_id,
            gender=demographic_or_none(ctx.payload.gender),
            age_band=demographic_or_none(ctx.payload.age_band),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Employee.employee_code],
            set_={
                "department_id": stmt.excluded.department_id,
                "gender": stmt.excluded.gender,
                "age_band": stmt.excluded.age_band,
                "updated_at": func.now(),
            },
        ).returning(Employee.id)
        ctx.employee_id = db.execute(stmt).scalar_one()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("submit %s: upsert de employee %s falló", ctx.survey_code, ctx.employee_code)
        raise SurveyError(Reason.EMPLOYEE_UPSERT_FAILED)


def _create_response(ctx: SubmissionContext) -> None:
    db = ctx.db
    response = Response(survey_id=ctx.survey_id, employee_id=ctx.employee_id)
    db.add(response)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        if _is_duplicate_response(e):
            raise _reject(ctx, Reason.DUPLICATE_RESPONSE)
        # p. ej. FK rota si la encuesta se borró durante la petición
        logger.exception("submit %s: insert en responses violó %s", ctx.survey_code, e.orig)
        raise SurveyError(Reason.INTERNAL_ERROR)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("submit %s: insert en responses falló", ctx.survey_code)
        raise SurveyError(Reason.INTERNAL_ERROR)
    ctx.response_id = response.id


def _score_answers(ctx: SubmissionContext) -> None:
    items = []
    for code, raw in ctx.payload.answers.items():
        question_id, is_reverse = ctx.questions[code]
        items.append({
            "response_id": ctx.response_id,
            "question_id": question_id,
            "raw_score": raw,
            "scored_score": score_answer(raw, is_reverse),
        })
    ctx.items = items


def _store_items(ctx: SubmissionContext) -> None:
    db = ctx.db
    try:
        _insert_items(db, ctx.items)
        audit_log(
            db,
            actor=ctx.employee_code,
            action="survey.submit",
            payload={
                "survey_code": ctx.survey_code,
                "response_id": ctx.response_id,
                "items": len(ctx.items),
            },
            request=ctx.request,
        )
        db.commit()
    except SQLAlchemyError:
        # deshace también el INSERT de responses: no quedan respuestas sin items
        db.rollback()
        logger.exception(
            "submit %s: insert de %d items falló, response %s revertida",
            ctx.survey_code, len(ctx.items), ctx.response_id,
        )
        raise SurveyError(Reason.ITEM_INSERT_FAILED)


SUBMISSION_STEPS = (
    _check_shape,
    _check_employee_code,
    _check_department_present,
    _check_answers_present,
    _check_survey_window,
    _resolve_department,
    _resolve_questions,
    _upsert_employee,
    _create_response,
    _score_answers,
    _store_items,
)


def submit_response(
    db: Session,
    survey_code: str,
    body: Any,
    *,
    request: Optional[Request] = None,
    now: Optional[datetime] = None,
) -> SubmissionContext:
    ctx = SubmissionContext(db=db, survey_code=survey_code, body=body, request=request, now=now)
    for step in SUBMISSION_STEPS:
        step(ctx)
    logger.info(
        "submit %s aceptado: employee=%s response=%s items=%d",
        survey_code, ctx.employee_code, ctx.response_id, len(ctx.items),
    )
    return ctx
