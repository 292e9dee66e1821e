# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Outbound HTTP client for the static-site build webhook.
"""

from typing import Any

import httpx

from studio.core.clock import utcnow_iso
from studio.core.config import settings
from studio.core.logging import get_logger
from studio.metrics import BUILD_TRIGGERS

logger = get_logger(__name__)


class BuildTriggerError(Exception):
    """The build webhook answered with an error or could not be reached."""


class BuildTrigger:
    def __init__(self, url: str, token: str = "", timeout: float = 10.0):
        self._url = url
        self._token = token
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._url)

    def trigger(self, reason: str) -> dict[str, Any]:
        """POST a rebuild request. RuntimeError when unconfigured, BuildTriggerError upstream."""
        if not self.configured:
            BUILD_TRIGGERS.labels(status="not_configured").inc()
            raise RuntimeError("Build webhook not configured")

        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        payload = {"reason": reason, "triggered_at": utcnow_iso()}
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.post(self._url, json=payload, headers=headers)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            BUILD_TRIGGERS.labels(status="failed").inc()
            logger.error("Build webhook failed: %s", exc)
            raise BuildTriggerError(str(exc)) from exc

        BUILD_TRIGGERS.labels(status="triggered").inc()
        logger.info("Site rebuild triggered: reason=%s, status=%d", reason, resp.status_code)
        return {"status": "triggered", "reason": reason, "upstream_status": resp.status_code}


def build_default_trigger() -> BuildTrigger:
    return BuildTrigger(
        settings.BUILD_WEBHOOK_URL, settings.BUILD_WEBHOOK_TOKEN, settings.BUILD_WEBHOOK_TIMEOUT
    )
