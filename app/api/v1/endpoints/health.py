# app/api/v1/endpoints/health.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import check_db_connection, get_db

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
def health():
    return {"status": "ok"}

@router.get("/db")
def health_db(db: Session = Depends(get_db)):
    ok = check_db_connection(db)
    return {"db": "ok" if ok else "error"}
