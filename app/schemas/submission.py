from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.choices import AGE_BAND_CHOICES, GENDER_CHOICES


# ---------- Entradas ----------

class SubmitIn(BaseModel):
    """
    Cuerpo de POST /surveys/{code}/submit.
    Solo valida la forma; el formato del employeeCode, los códigos de pregunta y los
    valores 1..6 se revisan en el pipeline (cada uno con su propio reason).
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    employee_code: str = Field(alias="employeeCode")
    department_name: str = Field(alias="departmentName")
    gender: Optional[str] = None
    age_band: Optional[str] = Field(default=None, alias="ageBand")
    # valores Any: un 7 o un "3" debe terminar en invalid_score, no en invalid_request
    answers: Dict[str, Any]

    @field_validator("gender")
    @classmethod
    def _check_gender(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in GENDER_CHOICES:
            raise ValueError(f"gender inválido: {v!r}")
        return v

    @field_validator("age_band")
    @classmethod
    def _check_age_band(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in AGE_BAND_CHOICES:
            raise ValueError(f"ageBand inválido: {v!r}")
        return v


# ---------- Salidas ----------

class SubmitOut(BaseModel):
    ok: bool = True
