# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for QR codes and their scan events."""
from typing import Any, Optional

from studio.repositories.document_store import DocumentStore

QR_CODES = "qr_codes"
QR_SCANS = "qr_code_scans"


class QrCodeRepository:
    def __init__(self, store: DocumentStore):
        self._store = store

    # ── Codes ──

    def get(self, qr_id: str) -> Optional[dict[str, Any]]:
        return self._store.get(QR_CODES, qr_id)

    def list_codes(self, source: Optional[str] = None) -> list[dict[str, Any]]:
        where = [("source", "==", source)] if source else []
        return self._store.query(QR_CODES, where=where, order_by="created_at", descending=True)

    def count(self) -> int:
        return self._store.count(QR_CODES)

    def save(self, qr_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._store.set(QR_CODES, qr_id, data)

    # ── Scans ──

    def add_scan(self, scan: dict[str, Any]) -> dict[str, Any]:
        return self._store.add(QR_SCANS, scan)

    def scans_for(self, qr_id: str) -> list[dict[str, Any]]:
        return self._store.query(
            QR_SCANS, where=[("qr_id", "==", qr_id)], order_by="scanned_at", descending=True
        )

    def all_scans(self) -> list[dict[str, Any]]:
        return self._store.query(QR_SCANS, order_by="scanned_at", descending=True)
