import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.requests import Request

from tutordesk.api.v1.router import api_router
from tutordesk.core.errors import StoreUnavailable, TutorDeskError
from tutordesk.core.logging import setup_logging
from tutordesk.db.bootstrap import run_migrations_and_seed

logger = logging.getLogger(__name__)

setup_logging()

api = FastAPI(
    title="TutorDesk - identidade e matrícula",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    swagger_ui_parameters={"displayRequestDuration": True, "persistAuthorization": True},
)

api.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # ajuste para domínios específicos em produção
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# métricas /metrics (Prometheus)
Instrumentator().instrument(api).expose(api, include_in_schema=False, should_gzip=True)

api.include_router(api_router, prefix="/api/v1")

@api.get("/healthz", tags=["health"])
def healthz():
    return {"status": "ok"}

@api.on_event("startup")
def startup():
    run_migrations_and_seed()

def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"code": code, "message": message, "details": {}})

@api.exception_handler(TutorDeskError)
def handle_domain_error(request: Request, exc: TutorDeskError):
    if exc.http_status >= 500:
        logger.error("request failed", extra={"error_code": exc.code, "path": request.url.path})
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())

@api.exception_handler(IntegrityError)
def handle_integrity_error(request: Request, exc: IntegrityError):
    # só chega aqui o que os serviços não reexecutam (ex.: e-mail duplicado)
    logger.info("integrity violation", extra={"path": request.url.path})
    return _error(409, "UNIQUE_VIOLATION", "Registro duplicado.")

@api.exception_handler(OperationalError)
def handle_store_down(request: Request, exc: OperationalError):
    logger.error("database unavailable", extra={"path": request.url.path}, exc_info=True)
    return _error(503, StoreUnavailable.code, "Banco de dados indisponível.")

@api.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("unhandled error", extra={"path": request.url.path})
    return _error(500, "INTERNAL_ERROR", "Erro interno.")
