from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_targeting_service
from ..models.page import Page, PageType
from ..services.targeting import Decision, TargetingService

router = APIRouter(tags=["redirects"])


def denial_response(decision: Decision, follow_fallback: bool = True) -> Response:
    headers = {"Cache-Control": "no-store"}
    if follow_fallback and decision.fallback_target:
        return RedirectResponse(decision.fallback_target, status_code=302, headers=headers)
    return JSONResponse(status_code=403, content=decision.to_dict(), headers=headers)


@router.get("/l/{url}")
def follow_short_link(
    url: str,
    request: Request,
    db: Session = Depends(get_db),
    targeting: TargetingService = Depends(get_targeting_service),
):
    page = db.query(Page).filter_by(url=url, type=PageType.LINK, is_enabled=True).first()
    if not page or not page.location_url:
        raise HTTPException(status_code=404, detail="Link not found")

    decision = targeting.evaluate_request(page, request.headers)
    if not decision.allowed:
        return denial_response(decision)

    return RedirectResponse(page.location_url, status_code=page.redirect_status())
