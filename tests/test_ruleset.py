from datetime import datetime

from biohost.services.device_detection import DeviceType
from biohost.services.ruleset import EMPTY_RULESET, RuleSet, Schedule, parse_ruleset, parse_time_of_day


def test_full_document_parses():
    rules = parse_ruleset(
        {
            "countries": ["gb", "US"],
            "exclude_countries": ["ru"],
            "devices": ["mobile", "Desktop"],
            "browsers": ["Chrome", "Safari"],
            "operating_systems": ["iOS", "Android"],
            "languages": ["EN", "es"],
            "schedule": {
                "start": "2024-01-01",
                "end": "2024-12-31",
                "time_start": "09:00",
                "time_end": "17:00",
                "days": [1, 2, 3, 4, 5],
            },
            "fallback_url": "https://example.com/unavailable",
        }
    )
    assert rules.countries == {"GB", "US"}
    assert rules.exclude_countries == {"RU"}
    assert rules.devices == {DeviceType.MOBILE, DeviceType.DESKTOP}
    assert rules.browsers == {"Chrome", "Safari"}
    assert rules.operating_systems == {"iOS", "Android"}
    assert rules.languages == {"en", "es"}
    assert rules.schedule == Schedule(
        start_date=datetime(2024, 1, 1),
        end_date=datetime(2024, 12, 31),
        time_start=9 * 60,
        time_end=17 * 60,
        days_of_week=frozenset({1, 2, 3, 4, 5}),
    )
    assert rules.fallback_target == "https://example.com/unavailable"
    assert not rules.is_empty()


def test_absent_or_non_mapping_documents_are_empty():
    assert parse_ruleset(None) is EMPTY_RULESET
    assert parse_ruleset({}) is EMPTY_RULESET
    assert parse_ruleset("not json") is EMPTY_RULESET
    assert parse_ruleset(["GB"]) is EMPTY_RULESET
    assert EMPTY_RULESET.is_empty()


def test_malformed_fields_mean_no_constraint():
    rules = parse_ruleset(
        {
            "countries": "GB",
            "devices": ["smartwatch", 42],
            "browsers": None,
            "languages": [None, ""],
            "schedule": "weekdays",
            "fallback_url": 17,
        }
    )
    assert rules == RuleSet()
    assert rules.is_empty()


def test_fallback_alone_is_not_a_restriction():
    assert parse_ruleset({"fallback_url": "https://example.com"}).is_empty()


def test_empty_schedule_document_is_kept():
    rules = parse_ruleset({"schedule": {}})
    assert rules.schedule == Schedule()
    assert not rules.is_empty()


def test_schedule_field_degradation():
    rules = parse_ruleset(
        {"schedule": {"start": "not a date", "time_start": "25:00", "time_end": "17:00", "days": ["1", 9, True]}}
    )
    assert rules.schedule.start_date is None
    assert rules.schedule.time_start is None
    assert rules.schedule.time_end == 17 * 60
    assert rules.schedule.days_of_week == {1}


def test_parse_time_of_day():
    assert parse_time_of_day("09:30") == 570
    assert parse_time_of_day("9:05") == 545
    assert parse_time_of_day("23:59:59") == 23 * 60 + 59
    assert parse_time_of_day("noon") is None
    assert parse_time_of_day(None) is None


def test_parse_ruleset_passes_through_typed_rules():
    rules = RuleSet(countries=frozenset({"GB"}))
    assert parse_ruleset(rules) is rules


def test_document_roundtrip_shape():
    document = {
        "countries": ["GB", "US"],
        "devices": ["mobile"],
        "schedule": {"start": "2024-01-01", "end": "2024-12-31", "days": [6, 0]},
        "fallback_url": "https://example.com/x",
    }
    assert parse_ruleset(document).to_document() == {
        "countries": ["GB", "US"],
        "devices": ["mobile"],
        "schedule": {"start": "2024-01-01T00:00:00", "end": "2024-12-31", "days": [0, 6]},
        "fallback_url": "https://example.com/x",
    }
