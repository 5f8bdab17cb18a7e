# app/models/employee.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    employee_code = Column(String(20), unique=True, nullable=False, index=True)  # siempre en mayúsculas
    department_id = Column(Integer, ForeignKey("departments.id", ondelete="RESTRICT"), nullable=False, index=True)  # se desactiva, no se borra
    gender = Column(String(20), nullable=True)    # NULL = "未回答"
    age_band = Column(String(20), nullable=True)  # NULL = "未回答"

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    department = relationship("Department")
