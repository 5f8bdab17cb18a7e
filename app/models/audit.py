# app/models/audit.py
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB

from app.db.base_class import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True)
    actor = Column(String(20), index=True, nullable=True)  # employee_code
    action = Column(String(100), nullable=False)
    payload = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    ip = Column(String(64), nullable=True)
    ua = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
