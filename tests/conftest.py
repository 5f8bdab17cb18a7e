from __future__ import annotations

import os

# La app lee DATABASE_URL al importar app.db.session
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.survey import Department, Question, Survey

SURVEY_CODE = "2026-02"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def now():
    return datetime.now(timezone.utc)


@pytest.fixture()
def seeded(session_factory, now):
    """Encuesta 2026-02 abierta, departamentos y preguntas del escenario de ejemplo."""
    with session_factory() as s:
        s.add_all([
            Survey(code=SURVEY_CODE, name="2026年2月 従業員サーベイ",
                   start_at=now - timedelta(days=1), end_at=now + timedelta(days=30), status="open"),
            Survey(code="2025-12", name="2025年12月",
                   start_at=now - timedelta(days=60), end_at=now - timedelta(days=30), status="closed"),
            Survey(code="2027-01", name="2027年1月",
                   start_at=now + timedelta(days=90), end_at=now + timedelta(days=120), status="open"),
            Survey(code="2026-03", name="2026年3月",
                   start_at=now - timedelta(days=1), end_at=now + timedelta(days=30), status="draft"),
        ])
        s.add_all([
            Department(name="Engineering", is_active=True, sort_order=2),
            Department(name="Sales", is_active=True, sort_order=1),
            Department(name="Legacy", is_active=False, sort_order=0),
        ])
        # A2 antes que A1 a propósito: el orden lo da display_order
        s.add_all([
            Question(question_code="A2", scale="A", question_text="仕事を通じて成長できている",
                     display_order=2, is_reverse=False, is_active=True),
            Question(question_code="A1", scale="A", question_text="キャリアの見通しが持てる",
                     display_order=1, is_reverse=False, is_active=True),
            Question(question_code="B1", scale="B", question_text="休暇が取りやすい",
                     display_order=3, is_reverse=False, is_active=False),
            Question(question_code="F1", scale="F", question_text="一度も嘘をついたことがない",
                     display_order=10, is_reverse=True, is_active=True),
            Question(question_code="X1", scale="X", question_text="未使用のスケール",
                     display_order=5, is_reverse=False, is_active=True),
        ])
        s.commit()
    return session_factory


@pytest.fixture()
def client(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
