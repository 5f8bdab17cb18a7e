# app/api/v1/endpoints/surveys.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.meta import MetaOut
from app.schemas.submission import SubmitIn, SubmitOut
from app.services.metadata import build_meta
from app.services.submission import submit_response

router = APIRouter(prefix="/surveys", tags=["surveys"])


@router.get("/{survey_code}/meta", response_model=MetaOut)
def get_survey_meta(
    survey_code: str = Path(..., description="Código de la encuesta, ej. 2026-02"),
    db: Session = Depends(get_db),
):
    """Todo lo que el formulario necesita: encuesta, departamentos, preguntas por escala y opciones."""
    return build_meta(db, survey_code)


@router.post(
    "/{survey_code}/submit",
    response_model=SubmitOut,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SubmitIn.model_json_schema(by_alias=True)}},
        }
    },
)
def submit_survey(
    request: Request,
    survey_code: str = Path(...),
    body: Any = Body(default=None),
    db: Session = Depends(get_db),
):
    # La forma del body la valida el pipeline (para responder invalid_request y no 422)
    submit_response(db, survey_code, body, request=request)
    return SubmitOut(ok=True)
