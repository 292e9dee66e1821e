# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Email delivery providers with ordered fallback.

Resend is tried first; SMTP is the fallback. A provider that is not
configured fails immediately so the next one is tried.
"""

import smtplib
import ssl
import time
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Optional

import resend

from studio.core.config import settings
from studio.core.logging import get_logger
from studio.metrics import EMAILS_SENT, EMAIL_SEND_DURATION

logger = get_logger(__name__)


class EmailDeliveryError(RuntimeError):
    """Every configured provider failed for one message."""

    def __init__(self, message: str, errors: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.errors = errors or {}


class ResendProvider:
    name = "resend"

    def __init__(self, api_key: str, from_address: str, reply_to: str = ""):
        self._api_key = api_key
        self._from = from_address
        self._reply_to = reply_to

    def send(self, to: str, subject: str, html: str, text: str) -> dict[str, Any]:
        if not self._api_key:
            raise RuntimeError("Resend API key not configured")
        resend.api_key = self._api_key
        params: dict[str, Any] = {
            "from": self._from,
            "to": [to],
            "subject": subject,
            "html": html,
            "text": text,
        }
        if self._reply_to:
            params["reply_to"] = self._reply_to
        response = resend.Emails.send(params)
        return {"id": response.get("id") if isinstance(response, dict) else str(response)}


class SmtpProvider:
    name = "smtp"

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        from_address: str,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._from = from_address
        self._use_tls = use_tls
        self._timeout = timeout

    def _build_message(self, to: str, subject: str, html: str, text: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self._from
        msg["To"] = to
        msg.attach(MIMEText(text, "plain", "utf-8"))
        msg.attach(MIMEText(html, "html", "utf-8"))
        return msg

    def send(self, to: str, subject: str, html: str, text: str) -> dict[str, Any]:
        if not self._host or not self._user:
            raise RuntimeError("SMTP not configured")
        msg = self._build_message(to, subject, html, text)

        if self._port == 465:
            server = smtplib.SMTP_SSL(
                self._host, self._port, context=ssl.create_default_context(), timeout=self._timeout
            )
        else:
            server = smtplib.SMTP(self._host, self._port, timeout=self._timeout)
        try:
            if self._port != 465 and self._use_tls:
                server.starttls(context=ssl.create_default_context())
            server.login(self._user, self._password)
            server.sendmail(self._from.split("<")[-1].rstrip(">"), [to], msg.as_string())
        finally:
            try:
                server.quit()
            except (smtplib.SMTPException, OSError):
                server.close()
        return {"id": f"smtp-{time.time():.6f}"}


class EmailSender:
    """Send one message through the first provider that succeeds."""

    def __init__(self, providers: list):
        self._providers = providers

    @property
    def provider_names(self) -> list[str]:
        return [p.name for p in self._providers]

    def send_with_fallback(self, to: str, subject: str, content: dict[str, str]) -> dict[str, Any]:
        errors: dict[str, str] = {}
        start = time.time()
        try:
            for provider in self._providers:
                try:
                    result = provider.send(to, subject, content["html"], content["text"])
                except Exception as exc:
                    errors[provider.name] = str(exc)
                    EMAILS_SENT.labels(provider=provider.name, status="failed").inc()
                    logger.warning("Email via %s to %s failed: %s", provider.name, to, exc)
                    continue
                EMAILS_SENT.labels(provider=provider.name, status="sent").inc()
                logger.info("Email sent via %s to %s", provider.name, to)
                return {"success": True, "service": provider.name, "result": result}
        finally:
            EMAIL_SEND_DURATION.observe(time.time() - start)

        logger.error("All email services failed for %s: %s", to, errors)
        raise EmailDeliveryError("All email services failed", errors)


def build_default_sender() -> EmailSender:
    return EmailSender([
        ResendProvider(settings.RESEND_API_KEY, settings.EMAIL_FROM_ADDRESS, settings.EMAIL_REPLY_TO),
        SmtpProvider(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            user=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            from_address=settings.EMAIL_FROM_ADDRESS,
            use_tls=settings.SMTP_USE_TLS,
            timeout=settings.SMTP_TIMEOUT,
        ),
    ])
