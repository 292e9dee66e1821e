# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Email bodies for admin notifications. Pure functions: no I/O.
"""

from html import escape
from typing import Any, Optional
from urllib.parse import quote

from studio.models.domain import CONTACT_EVENT_LABELS, CONTACT_SERVICE_LABELS


def event_label(event_type: Optional[str]) -> str:
    if not event_type:
        return ""
    return CONTACT_EVENT_LABELS.get(event_type, event_type)


def contact_subject(contact: dict[str, Any]) -> str:
    label = event_label(contact.get("event_type"))
    suffix = f" - {label}" if label else ""
    return f"Nueva consulta{suffix} - {contact.get('name', '')}"


def _detail_rows(contact: dict[str, Any]) -> list[tuple[str, str]]:
    rows = [("Nombre", contact.get("name") or ""), ("Email", contact.get("email") or "")]
    if contact.get("phone"):
        rows.append(("Teléfono", contact["phone"]))
    if contact.get("event_type"):
        rows.append(("Tipo de evento", event_label(contact["event_type"])))
    if contact.get("event_date"):
        rows.append(("Fecha del evento", contact["event_date"]))
    if contact.get("location"):
        rows.append(("Ubicación", contact["location"]))
    if contact.get("budget"):
        rows.append(("Presupuesto", contact["budget"]))
    if contact.get("services"):
        rows.append((
            "Servicios",
            ", ".join(CONTACT_SERVICE_LABELS.get(s, s) for s in contact["services"]),
        ))
    if contact.get("referral"):
        rows.append(("¿Cómo nos conoció?", contact["referral"]))
    return rows


def contact_notification(contact: dict[str, Any], studio_name: str, admin_url: str) -> dict[str, str]:
    """Render the admin notification for a new contact message as html + text."""
    rows = _detail_rows(contact)
    message = contact.get("message") or ""
    email = contact.get("email") or ""
    reply_href = f"mailto:{quote(email, safe='@')}?subject={quote('Re: ' + contact_subject(contact))}"

    banner = ""
    if contact.get("event_date"):
        banner = (
            '<div style="background:#fff3cd;border:1px solid #ffeeba;padding:12px;margin-bottom:16px;">'
            f"<strong>Fecha definida:</strong> {escape(contact['event_date'])}. Responder con prioridad."
            "</div>"
        )
    table = "".join(
        f'<tr><td style="padding:4px 12px 4px 0;font-weight:bold;">{escape(label)}</td>'
        f"<td>{escape(str(value))}</td></tr>"
        for label, value in rows
    )
    html = (
        '<div style="font-family:Arial,sans-serif;max-width:600px;margin:0 auto;">'
        f"<h2>Nueva consulta en {escape(studio_name)}</h2>"
        f"{banner}"
        f"<table>{table}</table>"
        "<h3>Mensaje</h3>"
        f'<p style="background:#f7f7f7;padding:12px;">{escape(message).replace(chr(10), "<br>")}</p>'
        f'<p><a href="{escape(reply_href)}">Responder a {escape(contact.get("name") or "")}</a></p>'
        f'<p><a href="{escape(admin_url)}">Abrir panel de administración</a></p>'
        "</div>"
    )

    lines = [f"Nueva consulta en {studio_name}", ""]
    if contact.get("event_date"):
        lines += [f"FECHA DEFINIDA: {contact['event_date']} - responder con prioridad", ""]
    lines += [f"{label}: {value}" for label, value in rows]
    lines += ["", "Mensaje:", message, "", f"Responder: {email}", f"Panel: {admin_url}"]
    return {"html": html, "text": "\n".join(lines)}


def sample_contact() -> dict[str, Any]:
    """Sample contact used by the test-email endpoint."""
    return {
        "id": "test",
        "name": "Cliente de Prueba",
        "email": "cliente@example.com",
        "phone": "+598 99 123 456",
        "event_type": "casamiento",
        "event_date": "2026-12-12",
        "location": "Montevideo",
        "budget": "USD 2000",
        "services": ["both"],
        "referral": "Instagram",
        "message": "Hola, este es un mensaje de prueba del formulario de contacto.",
    }
