from fastapi import Depends

from .config import Settings, get_settings
from .services.request_context import RequestContextExtractor
from .services.targeting import BlockConditionService, TargetingService


def get_context_extractor(settings: Settings = Depends(get_settings)) -> RequestContextExtractor:
    return RequestContextExtractor.from_settings(settings)


def get_targeting_service(
    extractor: RequestContextExtractor = Depends(get_context_extractor),
) -> TargetingService:
    return TargetingService(extractor)


def get_block_condition_service(
    extractor: RequestContextExtractor = Depends(get_context_extractor),
) -> BlockConditionService:
    return BlockConditionService(extractor)
