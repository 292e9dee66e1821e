# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: contact intake, triage, admin notifications and admin users.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from studio.core.dependencies import get_contact_notifier, get_contact_service
from studio.schemas.contacts import (
    AdminUserCreateRequest,
    AdminUserUpdateRequest,
    ContactAssignRequest,
    ContactFormRequest,
    ContactMessageResponse,
    ContactStatusRequest,
)
from studio.services.contact_notifier import ContactNotifier
from studio.services.contact_service import ContactService

router = APIRouter(prefix="/api/v1", tags=["Contacts"])


# ── Intake ──

@router.post("/contacts", status_code=201, response_model=ContactMessageResponse)
def submit_contact(
    payload: ContactFormRequest,
    background: BackgroundTasks,
    service: ContactService = Depends(get_contact_service),
    notifier: ContactNotifier = Depends(get_contact_notifier),
):
    """Store a contact form submission and email the admins after responding."""
    contact = service.submit(payload.model_dump(mode="json"))
    background.add_task(notifier.notify_new_contact, contact["id"])
    return contact


@router.post("/contacts/test-email")
def send_test_email(
    email: Optional[str] = Query(default=None, description="Send only to this address"),
    notifier: ContactNotifier = Depends(get_contact_notifier),
):
    try:
        return notifier.send_test_email(email)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ── Triage ──

@router.get("/contacts")
def list_contacts(
    status: Optional[str] = Query(default=None, pattern="^(new|in_progress|completed|archived)$"),
    source: Optional[str] = Query(default=None),
    unassigned: bool = Query(default=False),
    service: ContactService = Depends(get_contact_service),
):
    return service.list_contacts(status=status, source=source, unassigned=unassigned)


@router.get("/contacts/unread-count")
def unread_count(service: ContactService = Depends(get_contact_service)):
    return {"unread": service.unread_count()}


@router.get("/contacts/{contact_id}", response_model=ContactMessageResponse)
def get_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.get_contact(contact_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/contacts/{contact_id}/read", response_model=ContactMessageResponse)
def mark_read(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.mark_read(contact_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/contacts/{contact_id}/status", response_model=ContactMessageResponse)
def update_status(
    contact_id: str,
    payload: ContactStatusRequest,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.update_status(contact_id, payload.status)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/contacts/{contact_id}/assign", response_model=ContactMessageResponse)
def assign_to_project(
    contact_id: str,
    payload: ContactAssignRequest,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.assign_to_project(contact_id, payload.project_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/contacts/{contact_id}/assign", response_model=ContactMessageResponse)
def remove_from_project(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.remove_from_project(contact_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/contacts/{contact_id}/convert", status_code=201)
def convert_to_project(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    """Open a draft project from the inquiry."""
    try:
        return service.convert_to_project(contact_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/contacts/{contact_id}/notify")
def resend_notification(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
    notifier: ContactNotifier = Depends(get_contact_notifier),
):
    """Re-run the admin email fan-out for one contact."""
    try:
        service.get_contact(contact_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    result = notifier.notify_new_contact(contact_id)
    if result is None:
        raise HTTPException(status_code=400, detail="Contact is missing name, email or message")
    if not result["success"]:
        raise HTTPException(status_code=502, detail=result)
    return result


@router.delete("/contacts/{contact_id}")
def delete_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.delete_contact(contact_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ── Admin users ──

@router.post("/admin-users", status_code=201)
def create_admin_user(
    payload: AdminUserCreateRequest,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.create_admin(payload.model_dump(mode="json"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/admin-users")
def list_admin_users(service: ContactService = Depends(get_contact_service)):
    return service.list_admins()


@router.patch("/admin-users/{user_id}")
def update_admin_user(
    user_id: str,
    payload: AdminUserUpdateRequest,
    service: ContactService = Depends(get_contact_service),
):
    try:
        return service.update_admin(user_id, payload.model_dump(mode="json", exclude_unset=True, exclude_none=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
