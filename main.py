# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Studio Portal API
=================
Backend for a photography/videography studio: crew and project catalogue,
contact intake with admin email fan-out, crew availability with
double-booking detection, task templates, client portal, site and QR scan
analytics, and crew portfolios.

Project status state-machine:
    draft ─► shooting_scheduled ─► in_editing ─► delivered ─► archived
    shooting_scheduled ─► draft
    archived ─► draft

Port: 8010
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from studio.controllers import (
    analytics_controller,
    availability_controller,
    build_controller,
    contact_controller,
    content_controller,
    crew_controller,
    crew_portfolio_controller,
    portal_controller,
    project_controller,
    qr_controller,
    system_controller,
    template_controller,
)
from studio.core.config import settings
from studio.core.dependencies import get_contact_service, get_crew_service, get_project_service, get_store
from studio.core.database import engine
from studio.core.logging import get_logger
from studio.metrics import CREW_MEMBERS_TOTAL, PROJECTS_TOTAL, UNREAD_CONTACTS
from studio.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Create the document table and seed gauges on startup."""
    get_store().create_schema()
    CREW_MEMBERS_TOTAL.set(get_crew_service().get_stats()["total"])
    PROJECTS_TOTAL.set(len(get_project_service().list_projects()))
    UNREAD_CONTACTS.set(get_contact_service().unread_count())
    logger.info("%s v%s starting", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    engine.dispose()
    logger.info("%s shutting down", settings.SERVICE_NAME)


app = FastAPI(
    title="Studio Portal API",
    description="Crew, projects, contact intake, availability, templates, client portal and analytics.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(crew_controller.router)
app.include_router(project_controller.router)
app.include_router(contact_controller.router)
app.include_router(availability_controller.router)
app.include_router(analytics_controller.router)
app.include_router(qr_controller.router)
app.include_router(crew_portfolio_controller.router)
app.include_router(template_controller.router)
app.include_router(content_controller.router)
app.include_router(portal_controller.router)
app.include_router(build_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
