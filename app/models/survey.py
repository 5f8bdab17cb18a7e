# app/models/survey.py
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text, text

from app.db.base_class import Base


class Survey(Base):
    __tablename__ = "surveys"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), unique=True, nullable=False, index=True)  # ej. "2026-02"
    name = Column(String(255), nullable=False)
    start_at = Column(DateTime(timezone=True), nullable=False)
    end_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, server_default=text("'draft'"))  # draft|open|closed

    __table_args__ = (
        CheckConstraint("status IN ('draft', 'open', 'closed')", name="ck_surveys_status"),
    )


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), unique=True, nullable=False)
    is_active = Column(Boolean, nullable=False, server_default=text("true"))
    sort_order = Column(Integer, nullable=False, server_default=text("0"))


class Question(Base):
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True)
    question_code = Column(String(20), unique=True, nullable=False, index=True)  # A1..F5
    scale = Column(String(1), nullable=False, index=True)  # A..F
    question_text = Column(Text, nullable=False)
    display_order = Column(Integer, nullable=False)
    is_reverse = Column(Boolean, nullable=False, server_default=text("false"))
    is_active = Column(Boolean, nullable=False, server_default=text("true"))
