# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: site analytics and crew assignment analytics.
"""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from studio.core.dependencies import get_analytics_service, get_crew_analytics_service
from studio.schemas.analytics import AnalyticsEventRequest, RollupRequest
from studio.services.analytics_service import AnalyticsService
from studio.services.crew_analytics_service import CrewAnalyticsService

router = APIRouter(prefix="/api/v1", tags=["Analytics"])


# ── Site analytics ──

@router.post("/analytics/events", status_code=201)
def record_event(
    payload: AnalyticsEventRequest,
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.record_event(payload.model_dump())


@router.post("/analytics/rollup")
def rollup(
    payload: RollupRequest,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Aggregate one UTC day of events into its summary document."""
    return service.rollup_day(payload.day)


@router.get("/analytics/summaries")
def list_summaries(
    start_date: date = Query(...),
    end_date: date = Query(...),
    service: AnalyticsService = Depends(get_analytics_service),
):
    try:
        return service.summaries(start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/analytics/dashboard")
def dashboard(
    range_key: str = Query(default="30d", alias="range", pattern="^(7d|30d|90d)$"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.dashboard(range_key)


@router.get("/analytics/projects/{project_id}")
def project_analytics(
    project_id: str,
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.project_analytics(project_id)


@router.get("/analytics/realtime")
def realtime(
    minutes: Optional[int] = Query(default=None, ge=1, le=1440),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.realtime(minutes)


@router.get("/analytics/export")
def export_events(
    start: datetime = Query(...),
    end: datetime = Query(...),
    fmt: str = Query(default="json", alias="format", pattern="^(json|csv)$"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    try:
        data = service.export(start, end, fmt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if fmt == "csv":
        filename = f"analytics_{start.date().isoformat()}_{end.date().isoformat()}.csv"
        return Response(
            content=data,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    return data


# ── Crew assignment analytics ──

@router.get("/crew-analytics/overall")
def crew_overall(service: CrewAnalyticsService = Depends(get_crew_analytics_service)):
    return service.overall()


@router.get("/crew-analytics/members/{crew_member_id}")
def crew_member_metrics(
    crew_member_id: str,
    service: CrewAnalyticsService = Depends(get_crew_analytics_service),
):
    try:
        return service.member_metrics(crew_member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/crew-analytics/teams")
def team_metrics(
    member_ids: str = Query(..., description="Comma-separated crew member ids"),
    service: CrewAnalyticsService = Depends(get_crew_analytics_service),
):
    try:
        return service.team_metrics([m.strip() for m in member_ids.split(",") if m.strip()])
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
