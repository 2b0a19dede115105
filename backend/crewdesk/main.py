# main.py
"""
Point d'entrée de l'API CrewDesk.
Enregistre tous les modules via leurs routers.

Architecture : modules verticaux quasi-autonomes + engine transversal
(accès, politiques métier) sans dépendance HTTP.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from crewdesk.core.config import settings
from crewdesk.core.logging import setup_logging
from crewdesk.shared.errors import DomainError, ValidationFailed

from crewdesk.modules.auth.router       import router as auth_router
from crewdesk.modules.crew.router       import router as crew_public_router
from crewdesk.modules.crew.router       import admin_router as crew_admin_router
from crewdesk.modules.client.router     import router as client_router
from crewdesk.modules.assignment.router import admin_router as assignment_admin_router
from crewdesk.modules.assignment.router import client_router as shortlist_router
from crewdesk.modules.requests.router   import client_router as client_requests_router
from crewdesk.modules.requests.router   import admin_router as admin_requests_router
from crewdesk.modules.reminders.router  import router as reminders_router
from crewdesk.modules.admin.router      import router as admin_router

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Erreurs ───────────────────────────────────────────────

@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    body = {"detail": exc.detail}
    if isinstance(exc, ValidationFailed) and exc.errors:
        body["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": errors})


# ── Routers ───────────────────────────────────────────────

app.include_router(auth_router)
app.include_router(crew_public_router)
app.include_router(crew_admin_router)
app.include_router(client_router)
app.include_router(assignment_admin_router)
app.include_router(shortlist_router)
app.include_router(client_requests_router)
app.include_router(admin_requests_router)
app.include_router(reminders_router)
app.include_router(admin_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "1.0.0"}
