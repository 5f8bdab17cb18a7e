# app/services/metadata.py
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.choices import AGE_BAND_CHOICES, GENDER_CHOICES, LIKERT_CHOICES, SCALE_ORDER
from app.core.errors import Reason, SurveyError
from app.models.survey import Department, Question, Survey
from app.schemas.meta import (
    ChoicesOut,
    DepartmentOut,
    LikertChoiceOut,
    MetaOut,
    QuestionOut,
    SurveyHeaderOut,
)

logger = logging.getLogger(__name__)


def group_by_scale(questions) -> dict[str, list[QuestionOut]]:
    """
    Agrupa preguntas (ya ordenadas por display_order) en buckets A..F.
    Todas las escalas aparecen aunque estén vacías; escalas desconocidas se ignoran.
    """
    grouped: dict[str, list[QuestionOut]] = {scale: [] for scale in SCALE_ORDER}
    for q in questions:
        bucket = grouped.get(q.scale)
        if bucket is None:
            continue
        bucket.append(QuestionOut.model_validate(q))
    return grouped


def build_choices() -> ChoicesOut:
    return ChoicesOut(
        gender=list(GENDER_CHOICES),
        age_band=list(AGE_BAND_CHOICES),
        likert=[LikertChoiceOut(value=v, label=label) for v, label in LIKERT_CHOICES],
    )


def build_meta(db: Session, survey_code: str) -> MetaOut:
    survey = db.query(Survey).filter(Survey.code == survey_code).first()
    if not survey:
        raise SurveyError(Reason.SURVEY_NOT_FOUND)

    try:
        departments = (
            db.query(Department)
            .filter(Department.is_active.is_(True))
            .order_by(Department.sort_order.asc(), Department.name.asc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("meta %s: fallo leyendo departments", survey_code)
        raise SurveyError(Reason.INTERNAL_ERROR, message="部署取得に失敗しました")

    try:
        questions = (
            db.query(Question)
            .filter(Question.is_active.is_(True))
            .order_by(Question.display_order.asc(), Question.id.asc())
            .all()
        )
    except SQLAlchemyError:
        logger.exception("meta %s: fallo leyendo questions", survey_code)
        raise SurveyError(Reason.INTERNAL_ERROR, message="設問取得に失敗しました")

    return MetaOut(
        survey=SurveyHeaderOut.model_validate(survey),
        departments=[DepartmentOut.model_validate(d) for d in departments],
        questions_by_scale=group_by_scale(questions),
        choices=build_choices(),
    )
