# app/db/base.py
from app.db.base_class import Base  # noqa: F401

# Importa todos los modelos para que queden registrados en Base.metadata
# (lo usan alembic/env.py y tests/conftest.py)
from app.models import survey  # noqa: F401
from app.models import employee  # noqa: F401
from app.models import response  # noqa: F401
from app.models import audit  # noqa: F401
