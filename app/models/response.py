# app/models/response.py
from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Integer, SmallInteger, UniqueConstraint, func
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Response(Base):
    __tablename__ = "responses"

    id = Column(Integer, primary_key=True)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Un solo envío por empleado y encuesta: el INSERT que choca es la señal de duplicado
    __table_args__ = (
        UniqueConstraint("survey_id", "employee_id", name="uq_response_survey_employee"),
    )

    items = relationship("ResponseItem", back_populates="response", cascade="all, delete-orphan")


class ResponseItem(Base):
    __tablename__ = "response_items"

    id = Column(Integer, primary_key=True)
    response_id = Column(Integer, ForeignKey("responses.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)

    raw_score = Column(SmallInteger, nullable=False)     # 1..6 tal como respondió
    scored_score = Column(SmallInteger, nullable=False)  # 7 - raw si la pregunta es inversa

    __table_args__ = (
        UniqueConstraint("response_id", "question_id", name="uq_response_item_question"),
        CheckConstraint("raw_score BETWEEN 1 AND 6", name="ck_response_items_raw_score"),
        CheckConstraint("scored_score BETWEEN 1 AND 6", name="ck_response_items_scored_score"),
    )

    response = relationship("Response", back_populates="items")
