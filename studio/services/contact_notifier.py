# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: admin email fan-out for new contact messages.
Each admin gets an individual message sent with provider fallback; the
outcome is written back onto the contact document.
"""

from typing import Any, Optional

from studio.core.clock import utcnow_iso
from studio.core.config import settings
from studio.core.logging import get_logger
from studio.repositories.contact_repository import AdminUserRepository, ContactRepository
from studio.services.email_providers import EmailDeliveryError, EmailSender
from studio.services.email_templates import contact_notification, contact_subject, sample_contact

logger = get_logger(__name__)


class ContactNotifier:
    def __init__(
        self,
        contact_repo: ContactRepository,
        admin_repo: AdminUserRepository,
        sender: EmailSender,
    ) -> None:
        self._contacts = contact_repo
        self._admins = admin_repo
        self._sender = sender

    def admin_recipients(self) -> list[str]:
        """Active admins subscribed to contact messages, else the configured fallback list."""
        try:
            emails = [a["email"] for a in self._admins.contact_subscribers() if a.get("email")]
        except Exception:
            logger.exception("Admin recipient lookup failed, using fallback list")
            emails = []
        if not emails:
            return list(settings.ADMIN_NOTIFICATION_EMAILS)
        return emails

    def _fan_out(self, contact: dict[str, Any], recipients: list[str]) -> list[dict[str, Any]]:
        content = contact_notification(contact, settings.STUDIO_NAME, settings.ADMIN_PANEL_URL)
        subject = contact_subject(contact)
        results: list[dict[str, Any]] = []
        for admin in recipients:
            try:
                sent = self._sender.send_with_fallback(admin, subject, content)
                results.append({"admin": admin, "success": True, "service": sent["service"]})
            except EmailDeliveryError as exc:
                results.append({"admin": admin, "success": False, "error": str(exc)})
        return results

    def notify_new_contact(self, contact_id: str) -> Optional[dict[str, Any]]:
        """Email every admin about a contact and record the outcome on it."""
        contact = self._contacts.get(contact_id)
        if contact is None:
            logger.warning("Contact %s vanished before notification", contact_id)
            return None
        if not (contact.get("name") and contact.get("email") and contact.get("message")):
            logger.warning("Contact %s missing required fields, skipping email", contact_id)
            return None

        recipients = self.admin_recipients()
        results = self._fan_out(contact, recipients)
        now = utcnow_iso()
        delivered = [r for r in results if r["success"]]

        if delivered:
            changes = {
                "email_sent": True,
                "email_sent_at": now,
                "email_results": results,
                "email_error": None,
            }
            logger.info(
                "Contact %s notified: %d/%d admins reached", contact_id, len(delivered), len(results)
            )
        else:
            changes = {
                "email_sent": False,
                "email_results": results,
                "email_error": "All email services failed for every recipient",
                "email_error_at": now,
            }
            logger.error("Contact %s notification failed for all %d admins", contact_id, len(results))
        self._contacts.update(contact_id, changes)
        return {"contact_id": contact_id, "success": bool(delivered), "results": results}

    def send_test_email(self, to: Optional[str] = None) -> dict[str, Any]:
        """Send the sample contact notification. Raises ValueError with no recipients."""
        recipients = [to] if to else self.admin_recipients()
        if not recipients:
            raise ValueError("No recipients configured")
        sample = sample_contact()
        results = self._fan_out(sample, recipients)
        logger.info("Test email sent to %d recipients", len(recipients))
        return {
            "success": any(r["success"] for r in results),
            "recipients": recipients,
            "results": results,
            "available_services": self._sender.provider_names,
        }
