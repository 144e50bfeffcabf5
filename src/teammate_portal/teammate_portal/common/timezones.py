"""Supported timezones and locale-based detection.

Zone names are the human-facing names stored on people records; each maps to
an IANA identifier so times can be converted with ``zoneinfo``.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE, DEFAULT_TIMEZONE_LABEL

SUPPORTED_TIMEZONES: dict[str, str] = {
    "Hawaii": "Pacific/Honolulu",
    "Alaska": "America/Juneau",
    "Pacific Time (US & Canada)": "America/Los_Angeles",
    "Arizona": "America/Phoenix",
    "Mountain Time (US & Canada)": "America/Denver",
    "Central Time (US & Canada)": "America/Chicago",
    "Eastern Time (US & Canada)": "America/New_York",
    "Atlantic Time (Canada)": "America/Halifax",
    "Brasilia": "America/Sao_Paulo",
    "UTC": "Etc/UTC",
    "London": "Europe/London",
    "Dublin": "Europe/Dublin",
    "Lisbon": "Europe/Lisbon",
    "Madrid": "Europe/Madrid",
    "Paris": "Europe/Paris",
    "Berlin": "Europe/Berlin",
    "Rome": "Europe/Rome",
    "Amsterdam": "Europe/Amsterdam",
    "Athens": "Europe/Athens",
    "Moscow": "Europe/Moscow",
    "Mumbai": "Asia/Kolkata",
    "Hanoi": "Asia/Bangkok",
    "Beijing": "Asia/Shanghai",
    "Tokyo": "Asia/Tokyo",
    "Sydney": "Australia/Sydney",
}

# Exact locale first, then bare language.
_LOCALE_TIMEZONES: dict[str, str] = {
    "en-us": "Eastern Time (US & Canada)",
    "en-ca": "Eastern Time (US & Canada)",
    "en-gb": "London",
    "en-ie": "Dublin",
    "en-au": "Sydney",
    "en-in": "Mumbai",
    "fr-fr": "Paris",
    "fr-ca": "Eastern Time (US & Canada)",
    "de-de": "Berlin",
    "es-es": "Madrid",
    "es-mx": "Central Time (US & Canada)",
    "it-it": "Rome",
    "nl-nl": "Amsterdam",
    "pt-br": "Brasilia",
    "pt-pt": "Lisbon",
    "ja-jp": "Tokyo",
    "zh-cn": "Beijing",
    "vi-vn": "Hanoi",
    "fr": "Paris",
    "de": "Berlin",
    "it": "Rome",
    "ja": "Tokyo",
    "vi": "Hanoi",
}


def is_supported(name: Optional[str]) -> bool:
    return bool(name) and name in SUPPORTED_TIMEZONES


def timezone_choices() -> list[str]:
    return list(SUPPORTED_TIMEZONES.keys())


def to_zoneinfo(name: Optional[str]) -> ZoneInfo:
    return ZoneInfo(SUPPORTED_TIMEZONES.get(name or "", SUPPORTED_TIMEZONES[DEFAULT_TIMEZONE]))


def display_label(name: Optional[str]) -> str:
    """Label shown on profile pages; unset zones show the default with a marker."""
    if not name:
        return DEFAULT_TIMEZONE_LABEL
    return name


def map_locale_to_timezone(locale: Optional[str]) -> Optional[str]:
    if not locale:
        return None
    key = locale.strip().lower().replace("_", "-")
    if key in _LOCALE_TIMEZONES:
        return _LOCALE_TIMEZONES[key]
    return _LOCALE_TIMEZONES.get(key.split("-")[0])


def detect_from_accept_language(header: Optional[str]) -> str:
    """Pick a zone from the first locale in an Accept-Language header."""
    if not header:
        return DEFAULT_TIMEZONE
    first = header.split(",")[0].split(";")[0].strip()
    return map_locale_to_timezone(first) or DEFAULT_TIMEZONE


def localize(value: Optional[datetime], name: Optional[str]) -> Optional[datetime]:
    """Convert a stored UTC timestamp into the person's zone; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(to_zoneinfo(name))
