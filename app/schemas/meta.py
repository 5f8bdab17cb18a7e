from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class SurveyHeaderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    start_at: datetime
    end_at: datetime
    status: str


class DepartmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    question_code: str
    question_text: str


class LikertChoiceOut(BaseModel):
    value: int
    label: str


class ChoicesOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gender: List[str]
    age_band: List[str] = Field(alias="ageBand")
    likert: List[LikertChoiceOut]


class MetaOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    survey: SurveyHeaderOut
    departments: List[DepartmentOut]
    # claves en orden A..F, siempre presentes (lista vacía si no hay preguntas)
    questions_by_scale: Dict[str, List[QuestionOut]] = Field(alias="questionsByScale")
    choices: ChoicesOut
