# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: crew portfolios built from assigned projects and their media.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_crew_portfolio_service
from studio.services.crew_portfolio_service import CrewPortfolioService

router = APIRouter(prefix="/api/v1", tags=["Crew portfolio"])


@router.get("/crew-portfolio")
def all_portfolios(service: CrewPortfolioService = Depends(get_crew_portfolio_service)):
    """Every crew member, in team-page order, with portfolio stats."""
    return service.all_with_stats()


@router.get("/crew-portfolio/{member_id}/works")
def member_works(
    member_id: str,
    category: Optional[str] = Query(default=None),
    service: CrewPortfolioService = Depends(get_crew_portfolio_service),
):
    try:
        return service.works(member_id, category)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/crew-portfolio/{member_id}/featured")
def featured_works(
    member_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    service: CrewPortfolioService = Depends(get_crew_portfolio_service),
):
    try:
        return service.featured_works(member_id, limit)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/crew-portfolio/{member_id}/stats")
def member_stats(
    member_id: str,
    service: CrewPortfolioService = Depends(get_crew_portfolio_service),
):
    try:
        return service.stats(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
