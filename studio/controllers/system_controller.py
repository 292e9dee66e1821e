# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints: health, readiness, metrics."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from studio.core.clock import utcnow_iso
from studio.core.config import settings
from studio.core.dependencies import get_contact_service, get_crew_service, get_project_service, get_store
from studio.repositories.document_store import DocumentStore
from studio.services.contact_service import ContactService
from studio.services.crew_service import CrewService
from studio.services.project_service import ProjectService

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check(
    crew: CrewService = Depends(get_crew_service),
    projects: ProjectService = Depends(get_project_service),
    contacts: ContactService = Depends(get_contact_service),
):
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": utcnow_iso(),
        "crew_members": crew.get_stats()["total"],
        "projects": len(projects.list_projects()),
        "unread_contacts": contacts.unread_count(),
    }


@router.get("/health/ready")
def readiness_check(store: DocumentStore = Depends(get_store)):
    try:
        count = store.verify_connection()
        return {"status": "ok", "service": settings.SERVICE_NAME, "documents": count}
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "service": settings.SERVICE_NAME, "detail": str(exc)},
        )


@router.get("/metrics")
def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
