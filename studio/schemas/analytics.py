# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Request schemas for site analytics."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

EVENT_TYPE_PATTERN = (
    "^(project_view|media_interaction|cta_interaction|crew_interaction|page_view"
    "|scroll_depth|session_start|session_end|error)$"
)


class AnalyticsEventRequest(BaseModel):
    event_type: str = Field(..., pattern=EVENT_TYPE_PATTERN)
    session_id: str = Field(..., min_length=1, max_length=128)
    project_id: Optional[str] = None
    event_data: dict[str, Any] = Field(default_factory=dict)
    device_type: str = Field(default="unknown", pattern="^(desktop|mobile|tablet|unknown)$")
    user_language: str = Field(default="es", min_length=2, max_length=10)
    timestamp: Optional[datetime] = None
    landing_url: Optional[str] = Field(default=None, max_length=2048, description="Page URL incl. UTM params")
    referrer: Optional[str] = Field(default=None, max_length=2048)


class RollupRequest(BaseModel):
    day: Optional[date] = Field(default=None, description="UTC day to aggregate; yesterday when omitted")


# ── QR codes ──

QR_SOURCE_PATTERN = "^(project|gallery|contact)$"


class ScanLocation(BaseModel):
    country: Optional[str] = Field(default=None, max_length=100)
    city: Optional[str] = Field(default=None, max_length=100)


class QrScanRequest(BaseModel):
    qr_id: str = Field(..., min_length=1, max_length=128)
    source: str = Field(..., pattern=QR_SOURCE_PATTERN)
    source_id: str = Field(..., min_length=1, max_length=128)
    url: str = Field(..., min_length=1, max_length=2048)
    scanned_at: Optional[datetime] = None
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    referrer: Optional[str] = Field(default=None, max_length=2048)
    location: Optional[ScanLocation] = None


class QrUrlScanRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=2048)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    referrer: Optional[str] = Field(default=None, max_length=2048)
