# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models: value objects and vocabulary, NO FastAPI dependency.
"""

import re
import unicodedata
from typing import Any, Optional

from pydantic import BaseModel

LANGUAGES: tuple[str, ...] = ("es", "en", "pt")


class LocalizedText(BaseModel):
    """Text in every language the site is published in."""
    es: str = ""
    en: str = ""
    pt: str = ""


def display_text(value: Optional[dict[str, Any]], fallback: str = "Unknown") -> str:
    """First non-empty translation, Spanish preferred."""
    if not value:
        return fallback
    for lang in LANGUAGES:
        if value.get(lang):
            return value[lang]
    return fallback


def slugify(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-zA-Z0-9]+", "-", normalized).strip("-").lower()
    return slug or "project"


# ── Projects ──

PROJECT_STATUSES: tuple[str, ...] = (
    "draft", "shooting_scheduled", "in_editing", "delivered", "archived",
)

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "draft": {"shooting_scheduled", "archived"},
    "shooting_scheduled": {"in_editing", "draft", "archived"},
    "in_editing": {"delivered", "archived"},
    "delivered": {"archived"},
    "archived": {"draft"},
}

# ── Contact intake ──

CONTACT_STATUSES: tuple[str, ...] = ("new", "in_progress", "completed", "archived")
CONTACT_EVENT_TYPES: tuple[str, ...] = (
    "casamiento", "corporativos", "culturales-artisticos", "photoshoot", "prensa", "otros",
)
CONTACT_SERVICES: tuple[str, ...] = ("photos", "videos", "both", "other")

# ── Availability ──

SLOT_TYPES: tuple[str, ...] = ("available", "busy", "unavailable")
BLOCKING_SLOT_TYPES: tuple[str, ...] = ("busy", "unavailable")
WEEKDAYS: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

# ── Analytics ──

ANALYTICS_EVENT_TYPES: tuple[str, ...] = (
    "project_view", "media_interaction", "cta_interaction", "crew_interaction",
    "page_view", "scroll_depth", "session_start", "session_end", "error",
)
DEVICE_TYPES: tuple[str, ...] = ("desktop", "mobile", "tablet", "unknown")
MEDIA_INTERACTIONS: tuple[str, ...] = ("view", "play", "pause", "complete", "zoom")

# ── Task templates ──

TEMPLATE_CATEGORIES: tuple[str, ...] = (
    "wedding", "corporate", "birthday", "quinceanera", "photoshoot", "cultural", "custom",
)
TEMPLATE_STATUSES: tuple[str, ...] = ("active", "inactive", "archived")
TASK_PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "urgent")
TASK_STATUSES: tuple[str, ...] = ("pending", "in_progress", "completed", "skipped")
MILESTONE_TYPES: tuple[str, ...] = (
    "fecha_confirmada", "crew_armado", "shooting_finalizado", "imagenes_editadas",
    "imagenes_entregadas", "videos_editados", "videos_entregados", "album_creado",
    "material_entregado", "custom",
)

# ── Portal ──

PORTAL_MESSAGE_TYPES: tuple[str, ...] = ("note", "question", "feedback", "request")

CONTACT_EVENT_LABELS: dict[str, str] = {
    "casamiento": "Casamiento",
    "corporativos": "Corporativos",
    "culturales-artisticos": "Culturales/Artísticos",
    "photoshoot": "Photoshoot",
    "prensa": "Prensa",
    "otros": "Otros",
}

# contact form vocabulary → project event_type
CONTACT_TO_PROJECT_EVENT: dict[str, str] = {
    "casamiento": "wedding",
    "corporativos": "corporate",
    "culturales-artisticos": "cultural",
    "photoshoot": "photoshoot",
    "prensa": "press",
    "otros": "other",
}

CONTACT_SERVICE_LABELS: dict[str, str] = {
    "photos": "Fotos",
    "videos": "Videos",
    "both": "Fotos y videos",
    "other": "Otro",
}
