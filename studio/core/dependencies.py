# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection wiring.
Repositories and services are module-level singletons sharing one store.
"""

from studio.core.database import engine
from studio.repositories.analytics_repository import AnalyticsRepository
from studio.repositories.availability_repository import AvailabilityRepository
from studio.repositories.contact_repository import AdminUserRepository, ContactRepository
from studio.repositories.content_repository import ContentRepository
from studio.repositories.crew_repository import CrewRepository
from studio.repositories.document_store import DocumentStore
from studio.repositories.portal_repository import PortalRepository
from studio.repositories.project_repository import ProjectRepository
from studio.repositories.qr_code_repository import QrCodeRepository
from studio.repositories.template_repository import TemplateRepository
from studio.services.analytics_service import AnalyticsService
from studio.services.availability_service import AvailabilityService
from studio.services.build_trigger import BuildTrigger, build_default_trigger
from studio.services.contact_notifier import ContactNotifier
from studio.services.contact_service import ContactService
from studio.services.content_service import ContentService
from studio.services.crew_analytics_service import CrewAnalyticsService
from studio.services.crew_portfolio_service import CrewPortfolioService
from studio.services.crew_service import CrewService
from studio.services.email_providers import build_default_sender
from studio.services.portal_service import PortalService
from studio.services.project_service import ProjectService
from studio.services.qr_analytics_service import QrAnalyticsService
from studio.services.template_service import TemplateService

# ── Repositories ──
_store = DocumentStore(engine)
_crew_repo = CrewRepository(_store)
_project_repo = ProjectRepository(_store)
_contact_repo = ContactRepository(_store)
_admin_repo = AdminUserRepository(_store)
_availability_repo = AvailabilityRepository(_store)
_analytics_repo = AnalyticsRepository(_store)
_template_repo = TemplateRepository(_store)
_content_repo = ContentRepository(_store)
_portal_repo = PortalRepository(_store)
_qr_repo = QrCodeRepository(_store)

# ── Services ──
_crew_service = CrewService(_crew_repo, _availability_repo)
_project_service = ProjectService(_project_repo, _crew_repo, _contact_repo, _template_repo)
_contact_service = ContactService(_contact_repo, _admin_repo, _project_service)
_contact_notifier = ContactNotifier(_contact_repo, _admin_repo, build_default_sender())
_availability_service = AvailabilityService(_availability_repo, _crew_repo)
_analytics_service = AnalyticsService(_analytics_repo)
_crew_analytics_service = CrewAnalyticsService(_crew_repo, _project_repo)
_crew_portfolio_service = CrewPortfolioService(_crew_repo, _project_repo, _content_repo)
_qr_analytics_service = QrAnalyticsService(_qr_repo)
_template_service = TemplateService(_template_repo, _project_repo)
_content_service = ContentService(_content_repo, _project_repo)
_portal_service = PortalService(_portal_repo, _project_repo, _crew_repo, _template_repo)
_build_trigger = build_default_trigger()


def get_store() -> DocumentStore:
    return _store


def get_crew_service() -> CrewService:
    return _crew_service


def get_project_service() -> ProjectService:
    return _project_service


def get_contact_service() -> ContactService:
    return _contact_service


def get_contact_notifier() -> ContactNotifier:
    return _contact_notifier


def get_availability_service() -> AvailabilityService:
    return _availability_service


def get_analytics_service() -> AnalyticsService:
    return _analytics_service


def get_crew_analytics_service() -> CrewAnalyticsService:
    return _crew_analytics_service


def get_crew_portfolio_service() -> CrewPortfolioService:
    return _crew_portfolio_service


def get_qr_analytics_service() -> QrAnalyticsService:
    return _qr_analytics_service


def get_template_service() -> TemplateService:
    return _template_service


def get_content_service() -> ContentService:
    return _content_service


def get_portal_service() -> PortalService:
    return _portal_service


def get_build_trigger() -> BuildTrigger:
    return _build_trigger
