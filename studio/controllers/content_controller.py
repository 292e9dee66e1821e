# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: FAQs and social posts."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from studio.core.dependencies import get_content_service
from studio.schemas.content import (
    FaqCreateRequest,
    FaqUpdateRequest,
    ReorderRequest,
    SocialPostCreateRequest,
    SocialPostUpdateRequest,
)
from studio.services.content_service import ContentService

router = APIRouter(prefix="/api/v1", tags=["Content"])


# ── FAQs ──

@router.post("/faqs", status_code=201)
def create_faq(
    payload: FaqCreateRequest,
    service: ContentService = Depends(get_content_service),
):
    return service.create_faq(payload.model_dump())


@router.get("/faqs")
def list_faqs(
    category: Optional[str] = Query(default=None),
    include_unpublished: bool = Query(default=False),
    service: ContentService = Depends(get_content_service),
):
    return service.list_faqs(category=category, published_only=not include_unpublished)


@router.get("/faqs/{faq_id}")
def get_faq(faq_id: str, service: ContentService = Depends(get_content_service)):
    try:
        return service.get_faq(faq_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/faqs/{faq_id}")
def update_faq(
    faq_id: str,
    payload: FaqUpdateRequest,
    service: ContentService = Depends(get_content_service),
):
    try:
        return service.update_faq(faq_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/faqs/{faq_id}")
def delete_faq(faq_id: str, service: ContentService = Depends(get_content_service)):
    try:
        return service.delete_faq(faq_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ── Social posts ──

@router.post("/social-posts", status_code=201)
def create_post(
    payload: SocialPostCreateRequest,
    service: ContentService = Depends(get_content_service),
):
    try:
        return service.create_post(payload.model_dump())
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/projects/{project_id}/social-posts")
def project_posts(project_id: str, service: ContentService = Depends(get_content_service)):
    return service.posts_for_project(project_id)


@router.put("/projects/{project_id}/social-posts/reorder")
def reorder_posts(
    project_id: str,
    payload: ReorderRequest,
    service: ContentService = Depends(get_content_service),
):
    try:
        return service.reorder_posts(project_id, payload.ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/social-posts/{post_id}")
def update_post(
    post_id: str,
    payload: SocialPostUpdateRequest,
    service: ContentService = Depends(get_content_service),
):
    try:
        return service.update_post(post_id, payload.model_dump(exclude_unset=True, exclude_none=True))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/social-posts/{post_id}")
def delete_post(post_id: str, service: ContentService = Depends(get_content_service)):
    try:
        return service.delete_post(post_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
