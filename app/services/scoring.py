# app/services/scoring.py
from __future__ import annotations

import re
from typing import Any

from app.core.choices import LIKERT_MAX, LIKERT_MIN, NO_ANSWER

EMPLOYEE_CODE_RE = re.compile(r"^[A-Za-z0-9]{3,20}$", re.ASCII)


def normalize_employee_code(value: str) -> str:
    return value.strip().upper()


def is_valid_employee_code(code: str) -> bool:
    # fullmatch: "$" dejaría pasar un salto de línea final
    return EMPLOYEE_CODE_RE.fullmatch(code) is not None


def is_valid_score(value: Any) -> bool:
    """Entero 1..6. bool es subclase de int en Python, así que se excluye aparte."""
    return isinstance(value, int) and not isinstance(value, bool) and LIKERT_MIN <= value <= LIKERT_MAX


def score_answer(raw: int, is_reverse: bool) -> int:
    """Reflejo alrededor de 3.5 para preguntas inversas: 1<->6, 2<->5, 3<->4."""
    if is_reverse:
        return (LIKERT_MIN + LIKERT_MAX) - raw
    return raw


def demographic_or_none(value: str | None) -> str | None:
    """El centinela "未回答" se guarda como NULL."""
    if not value or value == NO_ANSWER:
        return None
    return value
