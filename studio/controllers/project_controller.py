# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: project endpoints - CRUD, status transitions and reporting, crew, rating.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_project_service
from studio.schemas.projects import (
    CrewAssignmentRequest,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    RatingRequest,
    StatusChangeRequest,
)
from studio.services.project_service import ProjectService

router = APIRouter(prefix="/api/v1", tags=["Projects"])


@router.post("/projects", status_code=201)
def create_project(
    payload: ProjectCreateRequest,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.create_project(payload.model_dump(mode="json"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/projects")
def list_projects(
    status: Optional[str] = Query(default=None),
    event_type: Optional[str] = Query(default=None),
    service: ProjectService = Depends(get_project_service),
):
    return service.list_projects(status=status, event_type=event_type)


@router.get("/projects/status-statistics")
def status_statistics(service: ProjectService = Depends(get_project_service)):
    """Project counts per status."""
    return service.status_statistics()


@router.get("/projects/status-changes")
def recent_status_changes(
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    service: ProjectService = Depends(get_project_service),
):
    return service.recent_status_changes(limit)


@router.get("/projects/by-status")
def projects_by_status(
    status: list[str] = Query(...),
    service: ProjectService = Depends(get_project_service),
):
    """Projects in any of the repeated ``status`` values."""
    try:
        return service.projects_in_statuses(status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/projects/{project_id}")
def get_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.get_project(project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/projects/{project_id}")
def update_project(
    project_id: str,
    payload: ProjectUpdateRequest,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.update_project(project_id, payload.model_dump(mode="json", exclude_unset=True, exclude_none=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/projects/{project_id}")
def delete_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.delete_project(project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/projects/{project_id}/status")
def change_status(
    project_id: str,
    payload: StatusChangeRequest,
    service: ProjectService = Depends(get_project_service),
):
    """Move a project to a new status along the allowed transitions."""
    try:
        return service.change_status(project_id, payload.status, payload.changed_by, payload.notes)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/projects/{project_id}/status-history")
def status_history(
    project_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.status_history(project_id, limit)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/projects/{project_id}/status-timeline")
def status_timeline(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.status_timeline(project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/projects/{project_id}/crew")
def assign_crew(
    project_id: str,
    payload: CrewAssignmentRequest,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.assign_crew(project_id, payload.crew_member_ids)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/projects/{project_id}/rating")
def rate_project(
    project_id: str,
    payload: RatingRequest,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.rate(project_id, payload.rating, payload.feedback)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/projects/{project_id}/contacts")
def project_contacts(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    try:
        return service.contacts_for_project(project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
