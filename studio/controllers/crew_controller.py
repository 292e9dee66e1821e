# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: crew member endpoints.
Thin HTTP layer: delegates ALL logic to CrewService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_crew_service
from studio.schemas.crew import (
    CrewMemberCreateRequest,
    CrewMemberResponse,
    CrewMemberUpdateRequest,
    CrewReorderRequest,
)
from studio.services.crew_service import CrewService

router = APIRouter(prefix="/api/v1", tags=["Crew"])


@router.post("/crew", status_code=201, response_model=CrewMemberResponse)
def create_member(
    payload: CrewMemberCreateRequest,
    service: CrewService = Depends(get_crew_service),
):
    return service.create_member(payload.model_dump())


@router.get("/crew")
def list_members(
    skills: Optional[str] = Query(default=None, description="Comma-separated skills, any match"),
    service: CrewService = Depends(get_crew_service),
):
    if skills:
        return service.by_skills(skills.split(","))
    return service.list_members()


@router.get("/crew/search")
def search_members(
    q: str = Query(..., min_length=1),
    service: CrewService = Depends(get_crew_service),
):
    return service.search(q)


@router.get("/crew/stats")
def crew_stats(service: CrewService = Depends(get_crew_service)):
    return service.get_stats()


@router.put("/crew/reorder")
def reorder_members(
    payload: CrewReorderRequest,
    service: CrewService = Depends(get_crew_service),
):
    try:
        return service.reorder(payload.ids)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/crew/{member_id}", response_model=CrewMemberResponse)
def get_member(
    member_id: str,
    service: CrewService = Depends(get_crew_service),
):
    try:
        return service.get_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/crew/{member_id}", response_model=CrewMemberResponse)
def update_member(
    member_id: str,
    payload: CrewMemberUpdateRequest,
    service: CrewService = Depends(get_crew_service),
):
    try:
        return service.update_member(member_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/crew/{member_id}")
def delete_member(
    member_id: str,
    service: CrewService = Depends(get_crew_service),
):
    """Delete a crew member and their availability."""
    try:
        return service.delete_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
