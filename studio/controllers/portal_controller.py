# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: client portal. Access failures answer 403.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_portal_service
from studio.schemas.portal import ClientInviteRequest, PortalMessageRequest, PublicAccessRequest
from studio.services.portal_service import PortalService

router = APIRouter(prefix="/api/v1/portal", tags=["Portal"])


@router.post("/clients", status_code=201)
def invite_client(
    payload: ClientInviteRequest,
    service: PortalService = Depends(get_portal_service),
):
    try:
        return service.invite_client(payload.model_dump(mode="json"))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/projects/{project_id}/clients")
def project_clients(project_id: str, service: PortalService = Depends(get_portal_service)):
    try:
        return service.clients_for_project(project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/projects/{project_id}/public-access")
def set_public_access(
    project_id: str,
    payload: PublicAccessRequest,
    service: PortalService = Depends(get_portal_service),
):
    try:
        return service.set_public_access(project_id, payload.enabled)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/projects/{project_id}")
def project_view(
    project_id: str,
    client_id: Optional[str] = Query(default=None),
    service: PortalService = Depends(get_portal_service),
):
    """What a client sees: status, crew, milestones and progress."""
    try:
        return service.project_view(project_id, client_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.post("/projects/{project_id}/messages", status_code=201)
def post_message(
    project_id: str,
    payload: PortalMessageRequest,
    service: PortalService = Depends(get_portal_service),
):
    try:
        return service.post_message(project_id, payload.model_dump())
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))


@router.get("/projects/{project_id}/messages")
def list_messages(project_id: str, service: PortalService = Depends(get_portal_service)):
    try:
        return service.messages(project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
