# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: crew availability - slots, weekly schedules, calendars, search.
Overlapping slot writes answer 409 with the conflicting slots.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_availability_service
from studio.schemas.availability import SlotCreateRequest, SlotUpdateRequest, WeeklyScheduleRequest
from studio.services.availability_service import AvailabilityService, SlotConflictError

router = APIRouter(prefix="/api/v1", tags=["Availability"])


def _conflict(e: SlotConflictError) -> HTTPException:
    return HTTPException(status_code=409, detail={"message": str(e), "conflicts": e.conflicts})


@router.post("/availability", status_code=201)
def create_slot(
    payload: SlotCreateRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.create_slot(payload.model_dump())
    except SlotConflictError as e:
        raise _conflict(e)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/availability/slots/{slot_id}")
def get_slot(
    slot_id: str,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.get_slot(slot_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/availability/slots/{slot_id}")
def update_slot(
    slot_id: str,
    payload: SlotUpdateRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.update_slot(slot_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    except SlotConflictError as e:
        raise _conflict(e)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/availability/slots/{slot_id}")
def delete_slot(
    slot_id: str,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.delete_slot(slot_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/availability/calendar/{crew_member_id}")
def member_calendar(
    crew_member_id: str,
    start: datetime = Query(...),
    end: datetime = Query(...),
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.get_calendar(crew_member_id, start, end)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/availability/calendars")
def all_calendars(
    start: datetime = Query(...),
    end: datetime = Query(...),
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.all_calendars(start, end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/availability/available")
def find_available(
    start: datetime = Query(...),
    end: datetime = Query(...),
    skills: Optional[str] = Query(default=None, description="Comma-separated, any match"),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Crew members free for the whole window."""
    try:
        return service.find_available(start, end, skills.split(",") if skills else None)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/availability/schedule/{crew_member_id}")
def get_schedule(
    crew_member_id: str,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        return service.get_schedule(crew_member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/availability/schedule/{crew_member_id}")
def set_schedule(
    crew_member_id: str,
    payload: WeeklyScheduleRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    try:
        days = {day: hours.model_dump() for day, hours in payload.days.items()}
        return service.set_schedule(crew_member_id, days, payload.timezone)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
