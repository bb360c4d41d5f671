"""FastAPI application entrypoint.

This module builds the application object: logging, CORS, the request
context middleware, the error handlers and the `/api` routers defined in
`academia.resources`. Controllers are intentionally thin: they accept
requests, delegate to services, and return JSON responses.

Endpoints implemented (all under /api, bearer token required unless noted):
- POST /register, POST /authenticate (public), GET /account
- CRUD on /alumnos, /cursos, /departamentos, /materias, /periodos,
  /coloquios, /carreras, /alumno-carreras, /cursadas,
  /administrador-departamentos
- GET /alumnos/carreras, GET /alumnos/cursadasActivas
- GET /cursos/{curso_id}/coloquios
- GET /health (public, outside /api)
"""

from contextlib import asynccontextmanager
import json
import logging
import os
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from .config import settings
from .database import create_db_and_tables
from .errors import BadRequestAlertError, bad_request_alert_handler
from .resources import api_router

logger = logging.getLogger("academia.api")
if not logger.handlers:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("Database ready (%s)", settings.DATABASE_URL.split("://", 1)[0])
    yield


app = FastAPI(title="Academia API", lifespan=lifespan)

# Wide-open CORS keeps a locally served frontend working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Location",
            f"X-{settings.APP_NAME}-alert",
            f"X-{settings.APP_NAME}-error",
            f"X-{settings.APP_NAME}-params",
        ],
    )

app.add_exception_handler(BadRequestAlertError, bad_request_alert_handler)
app.include_router(api_router, prefix=settings.API_PREFIX)


def _request_summary(request: Request, req_id: str, started: float, **extra) -> str:
    """One JSON log line describing `request`; `extra` adds outcome fields."""
    summary = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
    }
    summary.update(extra)
    return json.dumps(summary, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        client = request.client.host if request.client else "unknown"
        logger.exception("request_failed %s", _request_summary(request, req_id, started, client=client))
        raise
    response.headers["X-Request-ID"] = req_id
    if request.url.path.startswith(settings.API_PREFIX):
        logger.info("request_done %s",
                    _request_summary(request, req_id, started, status_code=response.status_code))
    return response


@app.get("/health")
def health():
    """Liveness check; does not touch the database."""
    return {"status": "ok"}
