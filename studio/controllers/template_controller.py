# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: task templates and the project tasks they generate.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_template_service
from studio.schemas.templates import (
    ApplyTemplateRequest,
    PredefinedTemplateRequest,
    TaskStatusRequest,
    TemplateCreateRequest,
    TemplateUpdateRequest,
)
from studio.services.template_service import TemplateService, predefined_tasks

router = APIRouter(prefix="/api/v1", tags=["Templates"])


@router.get("/templates/predefined/{category}")
def preview_predefined(category: str):
    """The stock task list for an event category."""
    try:
        return predefined_tasks(category)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/templates/predefined", status_code=201)
def create_from_predefined(
    payload: PredefinedTemplateRequest,
    service: TemplateService = Depends(get_template_service),
):
    return service.create_from_predefined(payload.category, payload.name, payload.created_by)


@router.post("/templates", status_code=201)
def create_template(
    payload: TemplateCreateRequest,
    service: TemplateService = Depends(get_template_service),
):
    try:
        return service.create_template(payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/templates")
def list_templates(
    category: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    tag: Optional[str] = Query(default=None),
    service: TemplateService = Depends(get_template_service),
):
    return service.list_templates(category=category, status=status, tag=tag)


@router.get("/templates/{template_id}")
def get_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service),
):
    try:
        return service.get_template(template_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/templates/{template_id}")
def update_template(
    template_id: str,
    payload: TemplateUpdateRequest,
    service: TemplateService = Depends(get_template_service),
):
    try:
        return service.update_template(template_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/templates/{template_id}")
def delete_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service),
):
    try:
        return service.delete_template(template_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/templates/{template_id}/apply", status_code=201)
def apply_template(
    template_id: str,
    payload: ApplyTemplateRequest,
    service: TemplateService = Depends(get_template_service),
):
    """Generate dated tasks on a project from this template."""
    try:
        return service.apply_template(
            template_id,
            payload.project_id,
            variables=payload.variables,
            applied_by=payload.applied_by,
            start_date=payload.start_date,
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ── Project tasks ──

@router.get("/projects/{project_id}/tasks")
def project_tasks(
    project_id: str,
    service: TemplateService = Depends(get_template_service),
):
    return service.project_tasks(project_id)


@router.get("/projects/{project_id}/template-applications")
def template_applications(
    project_id: str,
    service: TemplateService = Depends(get_template_service),
):
    return service.applications(project_id)


@router.patch("/tasks/{task_id}/status")
def update_task_status(
    task_id: str,
    payload: TaskStatusRequest,
    service: TemplateService = Depends(get_template_service),
):
    try:
        return service.update_task_status(task_id, payload.status)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
