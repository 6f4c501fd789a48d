from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, TypeVar

from .reasons import ReasonCode, reason_message
from .request_context import (
    BLOCK_COUNTRY_HEADERS,
    PAGE_COUNTRY_HEADERS,
    RequestContext,
    RequestContextExtractor,
)
from .ruleset import RuleSet, parse_ruleset
from .schedule import is_within_block_window, is_within_schedule

logger = logging.getLogger(__name__)


class Category(str, enum.Enum):
    COUNTRY = "country"
    DEVICE = "device"
    BROWSER = "browser"
    OS = "os"
    LANGUAGE = "language"
    SCHEDULE = "schedule"


CATEGORY_ORDER: tuple[Category, ...] = (
    Category.COUNTRY,
    Category.DEVICE,
    Category.BROWSER,
    Category.OS,
    Category.LANGUAGE,
    Category.SCHEDULE,
)


@dataclass(frozen=True)
class CheckResult:
    passed: bool
    reason_code: ReasonCode | None = None


PASS = CheckResult(True)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason_code: ReasonCode | None = None
    fallback_target: str | None = None

    @property
    def message(self) -> str | None:
        return None if self.allowed else reason_message(self.reason_code)

    def to_dict(self) -> dict[str, Any]:
        return {
            "allowed": self.allowed,
            "reason": self.reason_code.value if self.reason_code else None,
            "message": self.message,
            "fallback_url": self.fallback_target,
        }


ALLOW = Decision(True)


def check_country(rules: RuleSet, context: RequestContext) -> CheckResult:
    country = context.country
    if rules.exclude_countries and country and country in rules.exclude_countries:
        return CheckResult(False, ReasonCode.COUNTRY_EXCLUDED)
    if rules.countries:
        if not country:
            # Unknown country is let through; exclude_countries is the strict tool
            return PASS
        if country not in rules.countries:
            return CheckResult(False, ReasonCode.COUNTRY_NOT_ALLOWED)
    return PASS


def check_device(rules: RuleSet, context: RequestContext) -> CheckResult:
    if rules.devices and context.device_type not in rules.devices:
        return CheckResult(False, ReasonCode.DEVICE_NOT_ALLOWED)
    return PASS


def check_browser(rules: RuleSet, context: RequestContext) -> CheckResult:
    if rules.browsers and context.browser and context.browser not in rules.browsers:
        return CheckResult(False, ReasonCode.BROWSER_NOT_ALLOWED)
    return PASS


def check_operating_system(rules: RuleSet, context: RequestContext) -> CheckResult:
    os_name = context.operating_system
    if rules.operating_systems and os_name and os_name not in rules.operating_systems:
        return CheckResult(False, ReasonCode.OS_NOT_ALLOWED)
    return PASS


def check_language(rules: RuleSet, context: RequestContext) -> CheckResult:
    if not rules.languages or not context.accepted_languages:
        return PASS
    accepted = {language.lower() for language in context.accepted_languages}
    if accepted & rules.languages:
        return PASS
    return CheckResult(False, ReasonCode.LANGUAGE_NOT_ALLOWED)


def check_schedule(rules: RuleSet, context: RequestContext) -> CheckResult:
    if is_within_schedule(rules.schedule, context.now):
        return PASS
    return CheckResult(False, ReasonCode.OUTSIDE_SCHEDULE)


CHECKS: dict[Category, Callable[[RuleSet, RequestContext], CheckResult]] = {
    Category.COUNTRY: check_country,
    Category.DEVICE: check_device,
    Category.BROWSER: check_browser,
    Category.OS: check_operating_system,
    Category.LANGUAGE: check_language,
    Category.SCHEDULE: check_schedule,
}


@dataclass(frozen=True)
class EvaluationProfile:
    """What differs between the page-level and block-level call sites."""

    name: str
    categories: frozenset[Category]
    country_headers: tuple[str, ...]
    carries_fallback: bool


PAGE_PROFILE = EvaluationProfile(
    name="page",
    categories=frozenset(CATEGORY_ORDER),
    country_headers=PAGE_COUNTRY_HEADERS,
    carries_fallback=True,
)
BLOCK_PROFILE = EvaluationProfile(
    name="block",
    categories=frozenset(CATEGORY_ORDER),
    country_headers=BLOCK_COUNTRY_HEADERS,
    carries_fallback=False,
)


def evaluate(
    rules: RuleSet | Mapping[str, Any] | None,
    context: RequestContext,
    profile: EvaluationProfile = PAGE_PROFILE,
) -> Decision:
    """Run the profile's categories in fixed order and stop at the first failure."""
    rules = parse_ruleset(rules)
    if rules.is_empty():
        return ALLOW

    for category in CATEGORY_ORDER:
        if category not in profile.categories:
            continue
        result = CHECKS[category](rules, context)
        if not result.passed:
            return Decision(
                allowed=False,
                reason_code=result.reason_code,
                fallback_target=rules.fallback_target if profile.carries_fallback else None,
            )
    return ALLOW


class TargetingService:
    """Whole-page targeting, consulted before a page is served or redirected.

    Does not look at the page's enabled flag; callers filter disabled pages
    before evaluating.
    """

    profile = PAGE_PROFILE

    def __init__(self, extractor: RequestContextExtractor | None = None):
        self.extractor = extractor or RequestContextExtractor.from_settings()

    def context_for(self, headers: Mapping[str, str]) -> RequestContext:
        return self.extractor.extract(headers, self.profile.country_headers)

    def evaluate(self, page, context: RequestContext) -> Decision:
        decision = evaluate(page.targeting_rules(), context, self.profile)
        if not decision.allowed:
            logger.debug(
                "Page %s targeting denied: %s", getattr(page, "id", None), decision.reason_code.value
            )
        return decision

    def evaluate_request(self, page, headers: Mapping[str, str]) -> Decision:
        return self.evaluate(page, self.context_for(headers))

    def matches(self, page, headers: Mapping[str, str]) -> bool:
        return self.evaluate_request(page, headers).allowed


BlockT = TypeVar("BlockT")


class BlockConditionService:
    """Per-block visibility: enabled flag, column schedule, then conditions."""

    profile = BLOCK_PROFILE

    def __init__(self, extractor: RequestContextExtractor | None = None):
        self.extractor = extractor or RequestContextExtractor.from_settings()

    def context_for(self, headers: Mapping[str, str]) -> RequestContext:
        return self.extractor.extract(headers, self.profile.country_headers)

    def evaluate(self, block, context: RequestContext) -> Decision:
        if not block.is_enabled:
            decision = Decision(False, ReasonCode.BLOCK_DISABLED)
        elif not is_within_block_window(block.start_date, block.end_date, context.now):
            decision = Decision(False, ReasonCode.BLOCK_NOT_SCHEDULED)
        else:
            decision = evaluate(block.condition_rules(), context, self.profile)
        if not decision.allowed:
            logger.debug(
                "Block %s hidden: %s", getattr(block, "id", None), decision.reason_code.value
            )
        return decision

    def should_display(self, block, context: RequestContext) -> bool:
        return self.evaluate(block, context).allowed

    def visible_blocks(self, blocks: Iterable[BlockT], context: RequestContext) -> list[BlockT]:
        return [block for block in blocks if self.should_display(block, context)]
