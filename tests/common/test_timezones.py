from datetime import date, datetime, timezone

import pytest

from src.teammate_portal.teammate_portal.common import timezones


@pytest.mark.parametrize(
    "header, expected",
    [
        ("en-US,en;q=0.9", "Eastern Time (US & Canada)"),
        ("en-CA", "Eastern Time (US & Canada)"),
        ("en-GB", "London"),
        ("fr-FR,fr;q=0.9", "Paris"),
        ("es-MX", "Central Time (US & Canada)"),
        ("de-AT", "Berlin"),
        ("xx-YY", "Eastern Time (US & Canada)"),
        (None, "Eastern Time (US & Canada)"),
    ],
)
def test_detect_from_accept_language(header, expected):
    assert timezones.detect_from_accept_language(header) == expected


def test_display_label_marks_default():
    assert timezones.display_label(None) == "Eastern Time (US & Canada) (Default)"
    assert timezones.display_label("Tokyo") == "Tokyo"


def test_supported_zones_resolve_to_zoneinfo():
    assert timezones.is_supported("London")
    assert not timezones.is_supported("Mars/Olympus")
    assert timezones.to_zoneinfo("London").key == "Europe/London"
    assert timezones.to_zoneinfo(None).key == "America/New_York"


def test_localize_treats_naive_values_as_utc():
    local = timezones.localize(datetime(2024, 7, 1, 12, 0), "Tokyo")

    assert (local.day, local.hour) == (1, 21)
    assert timezones.localize(None, "Tokyo") is None


def test_localize_falls_back_to_default_zone():
    local = timezones.localize(datetime(2024, 1, 1, 3, 0, tzinfo=timezone.utc), None)

    assert local.date() == date(2023, 12, 31)
