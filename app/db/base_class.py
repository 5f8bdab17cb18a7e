# app/db/base_class.py
from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    """Base declarativa para surveys, departments, questions, employees, responses."""
    pass
