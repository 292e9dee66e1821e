# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: QR code scan tracking and reporting.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_qr_analytics_service
from studio.schemas.analytics import QR_SOURCE_PATTERN, QrScanRequest, QrUrlScanRequest
from studio.services.qr_analytics_service import QrAnalyticsService

router = APIRouter(prefix="/api/v1", tags=["QR codes"])


@router.post("/qr-codes/scans", status_code=201)
def track_scan(
    payload: QrScanRequest,
    service: QrAnalyticsService = Depends(get_qr_analytics_service),
):
    return service.track_scan(payload.model_dump())


@router.post("/qr-codes/scans/from-url", status_code=201)
def track_scan_from_url(
    payload: QrUrlScanRequest,
    service: QrAnalyticsService = Depends(get_qr_analytics_service),
):
    """Record a scan of a QR landing URL; the code id is its last path segment."""
    visitor = payload.model_dump(exclude={"url"}, exclude_none=True)
    try:
        return service.track_scan_from_url(payload.url, **visitor)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/qr-codes")
def list_codes(
    source: Optional[str] = Query(default=None, pattern=QR_SOURCE_PATTERN),
    service: QrAnalyticsService = Depends(get_qr_analytics_service),
):
    return service.list_codes(source)


@router.get("/qr-codes/summary")
def scan_summary(service: QrAnalyticsService = Depends(get_qr_analytics_service)):
    return service.summary()


@router.get("/qr-codes/{qr_id}")
def get_code(
    qr_id: str,
    service: QrAnalyticsService = Depends(get_qr_analytics_service),
):
    try:
        return service.get_code(qr_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/qr-codes/{qr_id}/scans")
def code_scans(
    qr_id: str,
    service: QrAnalyticsService = Depends(get_qr_analytics_service),
):
    try:
        return service.scans(qr_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
