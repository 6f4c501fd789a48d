import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..config import Settings, get_settings
from ..database import get_db
from ..dependencies import get_block_condition_service, get_targeting_service
from ..models.block import Block
from ..models.page import Page
from ..services.request_context import resolve_zone
from ..services.schedule import to_naive
from ..services.targeting import BlockConditionService, TargetingService
from .redirects import denial_response
from .schemas import BlockPayload, PagePayload, RuleSetPayload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _page_or_404(db: Session, page_id: UUID) -> Page:
    page = db.query(Page).filter_by(id=page_id).first()
    if not page:
        raise HTTPException(status_code=404, detail="Page not found")
    return page


def _serialize_block(block: Block) -> dict:
    return {
        "id": str(block.id),
        "type": block.type,
        "order": block.order,
        "content": block.get_setting("content", {}),
    }


@router.post("/pages", status_code=201)
def create_page(payload: PagePayload, db: Session = Depends(get_db)):
    if db.query(Page).filter_by(url=payload.url).first():
        raise HTTPException(status_code=409, detail="URL already in use")

    settings = {"redirect_type": payload.redirect_type}
    if payload.targeting is not None:
        settings["targeting"] = payload.targeting.to_document()

    page = Page(
        url=payload.url,
        type=payload.type,
        location_url=payload.location_url,
        is_enabled=payload.is_enabled,
        settings=settings,
    )
    db.add(page)
    db.commit()
    logger.info("Created %s page %s", page.type.value, page.id)
    return {"id": str(page.id), "url": page.url, "type": page.type.value}


@router.put("/pages/{page_id}/targeting")
def update_page_targeting(page_id: UUID, payload: RuleSetPayload, db: Session = Depends(get_db)):
    page = _page_or_404(db, page_id)
    # JSON columns only persist on reassignment
    page.settings = {**(page.settings or {}), "targeting": payload.to_document()}
    db.commit()
    return {"id": str(page.id), "targeting": page.targeting_rules().to_document()}


@router.post("/pages/{page_id}/blocks", status_code=201)
def create_block(
    page_id: UUID,
    payload: BlockPayload,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    page = _page_or_404(db, page_id)
    # sqlite drops offsets, so columns hold wall-clock time in the configured zone
    zone = resolve_zone(settings.TIMEZONE)
    start_date = to_naive(payload.start_date, zone) if payload.start_date else None
    end_date = to_naive(payload.end_date, zone) if payload.end_date else None
    block_settings = {"content": payload.content}
    if payload.conditions is not None:
        block_settings["conditions"] = payload.conditions.to_document()

    block = Block(
        page_id=page.id,
        type=payload.type,
        order=payload.order,
        is_enabled=payload.is_enabled,
        start_date=start_date,
        end_date=end_date,
        settings=block_settings,
    )
    db.add(block)
    db.commit()
    return {
        "id": str(block.id),
        "has_conditions": block.has_conditions(),
        "conditions_summary": block.conditions_summary(),
    }


@router.get("/pages/{url}")
def view_page(
    url: str,
    request: Request,
    db: Session = Depends(get_db),
    targeting: TargetingService = Depends(get_targeting_service),
    conditions: BlockConditionService = Depends(get_block_condition_service),
):
    page = db.query(Page).filter_by(url=url, is_enabled=True).first()
    if not page:
        raise HTTPException(status_code=404, detail="Page not found")

    decision = targeting.evaluate_request(page, request.headers)
    if not decision.allowed:
        return denial_response(decision, follow_fallback=False)

    context = conditions.context_for(request.headers)
    blocks = conditions.visible_blocks(page.blocks, context)
    return {
        "id": str(page.id),
        "url": page.url,
        "blocks": [_serialize_block(block) for block in blocks],
    }
