# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: QR code scan analytics.

Each scan is stored as an event; the code document keeps running totals.
A scan is unique when no earlier scan of the same code came from the same
visitor (IP address, else user agent). Scans with neither are always unique.
"""

from datetime import timedelta
from typing import Any, Optional
from urllib.parse import urlparse

from studio.core.clock import ensure_utc, parse_datetime, utcnow
from studio.core.logging import get_logger
from studio.metrics import QR_SCANS
from studio.repositories.qr_code_repository import QrCodeRepository

logger = get_logger(__name__)

SUMMARY_WINDOWS: dict[str, timedelta] = {
    "scans_today": timedelta(days=1),
    "scans_this_week": timedelta(days=7),
    "scans_this_month": timedelta(days=30),
}
TOP_SOURCES_LIMIT = 5
RECENT_SCANS_LIMIT = 10
URL_SCAN_SOURCE = "gallery"
URL_SCAN_SOURCE_ID = "url-scan"


def _visitor(scan: dict[str, Any]) -> Optional[str]:
    return scan.get("ip_address") or scan.get("user_agent") or None


def qr_id_from_url(url: str) -> str:
    """Last path segment of a QR landing URL."""
    qr_id = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    if not qr_id:
        raise ValueError("Invalid QR code URL")
    return qr_id


class QrAnalyticsService:
    def __init__(self, qr_repo: QrCodeRepository) -> None:
        self._codes = qr_repo

    # ── Intake ──

    def track_scan(self, data: dict[str, Any]) -> dict[str, Any]:
        scanned_at = ensure_utc(data["scanned_at"]) if data.get("scanned_at") else utcnow()
        qr_id = data["qr_id"]
        visitor = _visitor(data)
        repeat = visitor is not None and any(
            _visitor(s) == visitor for s in self._codes.scans_for(qr_id)
        )
        scan = self._codes.add_scan({**data, "scanned_at": scanned_at.isoformat()})

        code = self._codes.get(qr_id)
        if code is None:
            code = {
                "qr_id": qr_id,
                "source": data["source"],
                "source_id": data["source_id"],
                "url": data["url"],
                "scan_count": 0,
                "unique_scans": 0,
            }
        code["scan_count"] += 1
        code["unique_scans"] += 0 if repeat else 1
        code["last_scanned"] = scanned_at.isoformat()
        self._codes.save(qr_id, code)

        QR_SCANS.labels(source=data["source"]).inc()
        logger.info("QR scan: qr=%s, source=%s, unique=%s", qr_id, data["source"], not repeat)
        return scan

    def track_scan_from_url(self, url: str, **visitor: Any) -> dict[str, Any]:
        return self.track_scan({
            "qr_id": qr_id_from_url(url),
            "source": URL_SCAN_SOURCE,
            "source_id": URL_SCAN_SOURCE_ID,
            "url": url,
            **visitor,
        })

    # ── Queries ──

    def get_code(self, qr_id: str) -> dict[str, Any]:
        code = self._codes.get(qr_id)
        if code is None:
            raise KeyError(f"QR code '{qr_id}' not found")
        return code

    def list_codes(self, source: Optional[str] = None) -> list[dict[str, Any]]:
        return self._codes.list_codes(source)

    def scans(self, qr_id: str) -> list[dict[str, Any]]:
        self.get_code(qr_id)
        return self._codes.scans_for(qr_id)

    def summary(self) -> dict[str, Any]:
        scans = self._codes.all_scans()
        now = utcnow()
        result: dict[str, Any] = {"total_qr_codes": self._codes.count(), "total_scans": len(scans)}
        times = [t for t in (parse_datetime(s.get("scanned_at")) for s in scans) if t is not None]
        for key, window in SUMMARY_WINDOWS.items():
            cutoff = now - window
            result[key] = sum(1 for t in times if t > cutoff)

        sources: dict[str, int] = {}
        for scan in scans:
            sources[scan["source"]] = sources.get(scan["source"], 0) + 1
        top = sorted(sources.items(), key=lambda kv: kv[1], reverse=True)[:TOP_SOURCES_LIMIT]
        result["top_sources"] = [{"source": s, "count": n} for s, n in top]
        result["recent_activity"] = scans[:RECENT_SCANS_LIMIT]
        return result
