from fastapi import APIRouter, Depends, Request

from ..dependencies import get_context_extractor
from ..services.editor_options import COMMON_COUNTRIES, targeting_options
from ..services.request_context import RequestContextExtractor
from ..services.targeting import PAGE_PROFILE, evaluate
from .schemas import RuleSetPayload

router = APIRouter(tags=["targeting"])


@router.get("/targeting/options")
def get_targeting_options():
    return {"options": targeting_options(), "countries": COMMON_COUNTRIES}


@router.post("/targeting/preview")
def preview_targeting(
    payload: RuleSetPayload,
    request: Request,
    extractor: RequestContextExtractor = Depends(get_context_extractor),
):
    context = extractor.extract(request.headers, PAGE_PROFILE.country_headers)
    decision = evaluate(payload.to_document(), context, PAGE_PROFILE)
    return {"decision": decision.to_dict(), "context": context.to_dict()}
