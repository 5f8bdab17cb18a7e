# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.errors import Reason, SurveyError
from app.core.logging import setup_logging
from app.api.v1.endpoints import health, surveys

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

API_V1_PREFIX = "/api/v1"

app = FastAPI(
    title=settings.APP_NAME,
    description="API de recepción de la encuesta de clima laboral (escalas A-F, Likert 1-6)",
    version="1.0.0",
)

# CORS (en prod: restringe orígenes con CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------- errores -> {error, reason} ----------------

@app.exception_handler(SurveyError)
async def survey_error_handler(_request: Request, exc: SurveyError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_request: Request, exc: RequestValidationError):
    # JSON roto o tipos incorrectos: 400 en vez del 422 por defecto
    return JSONResponse(status_code=400, content=SurveyError(Reason.INVALID_REQUEST).to_body())


@app.exception_handler(SQLAlchemyError)
async def db_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Error de BD no clasificado en %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=SurveyError(Reason.INTERNAL_ERROR).to_body())


# Routers versionados
app.include_router(health.router,  prefix=API_V1_PREFIX)
app.include_router(surveys.router, prefix=API_V1_PREFIX)


@app.get("/")
def root():
    return {
        "message": "Survey Intake API",
        "version": "1.0.0",
        "docs": "/docs",
        "api_v1": API_V1_PREFIX,
    }
