# app/core/errors.py
from __future__ import annotations

from enum import Enum
from typing import Optional


class Reason(str, Enum):
    INVALID_REQUEST = "invalid_request"
    INVALID_EMPLOYEE_CODE = "invalid_employee_code"
    EMPTY_ANSWERS = "empty_answers"
    SURVEY_NOT_FOUND = "survey_not_found"
    OUTSIDE_WINDOW = "outside_window"
    INVALID_DEPARTMENT = "invalid_department"
    INVALID_QUESTION_CODE = "invalid_question_code"
    INVALID_SCORE = "invalid_score"
    DUPLICATE_RESPONSE = "duplicate_response"
    EMPLOYEE_UPSERT_FAILED = "employee_upsert_failed"
    ITEM_INSERT_FAILED = "item_insert_failed"
    INTERNAL_ERROR = "internal_error"


# reason -> (status HTTP, mensaje para el usuario)
REASON_TABLE: dict[Reason, tuple[int, str]] = {
    Reason.INVALID_REQUEST: (400, "リクエストの形式が正しくありません。"),
    Reason.INVALID_EMPLOYEE_CODE: (400, "社員IDは半角英数字3〜20文字で入力してください（例：A00123）"),
    Reason.EMPTY_ANSWERS: (400, "回答がありません。"),
    Reason.SURVEY_NOT_FOUND: (404, "サーベイが見つかりません"),
    Reason.OUTSIDE_WINDOW: (403, "回答期間外です。"),
    Reason.INVALID_DEPARTMENT: (400, "部署が正しくありません。"),
    Reason.INVALID_QUESTION_CODE: (400, "不明な設問コードが含まれています。"),
    Reason.INVALID_SCORE: (400, "回答値は1〜6の整数で入力してください。"),
    Reason.DUPLICATE_RESPONSE: (409, "回答済みのため再回答できません。"),
    Reason.EMPLOYEE_UPSERT_FAILED: (500, "社員情報の保存に失敗しました。"),
    Reason.ITEM_INSERT_FAILED: (500, "回答の保存に失敗しました。"),
    Reason.INTERNAL_ERROR: (500, "読み込みに失敗しました。時間をおいて再度お試しください。"),
}


class SurveyError(Exception):
    """Rechazo tipado: el handler de FastAPI lo traduce a {error, reason}."""

    def __init__(self, reason: Reason, question_code: Optional[str] = None, message: Optional[str] = None):
        self.reason = reason
        self.question_code = question_code
        self.status_code, default_message = REASON_TABLE[reason]
        self.message = message or default_message
        super().__init__(f"{reason.value}: {self.message}")

    def to_body(self) -> dict:
        body = {"error": self.message, "reason": self.reason.value}
        if self.question_code is not None:
            body["question_code"] = self.question_code
        return body
