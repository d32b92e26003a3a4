"""Client-side validation for user profile and address forms.

Both validators collect one message per offending field and never raise;
an empty dict means the form can be submitted.  Blank fields are optional
and are not checked.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import Any

__all__ = [
    "SOCIAL_PLATFORMS",
    "validate_address",
    "validate_profile",
]

_PHONE = re.compile(r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$")
_URL = re.compile(r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)/?$", re.IGNORECASE)
_COUNTRY = re.compile(r"^[a-zA-ZÀ-ÿ\s-]+$")
_CITY = re.compile(r"^[a-zA-ZÀ-ÿ0-9\s-]+$")
_POSTAL_CODE = re.compile(r"^[a-zA-Z0-9\s-]+$")

SOCIAL_PLATFORMS: dict[str, str] = {
    "facebook": "Facebook",
    "twitter": "X.com",
    "linkedin": "LinkedIn",
    "instagram": "Instagram",
    "github": "GitHub",
}

GENDERS = ("male", "female")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _check_name(value: str, label: str) -> str | None:
    if len(value.strip()) < 2:
        return f"{label} must be at least 2 characters"
    if len(value) > 50:
        return f"{label} cannot exceed 50 characters"
    return None


def _check_birth_date(raw: str, today: date) -> str | None:
    try:
        birth_date = date.fromisoformat(raw[:10])
    except ValueError:
        return "Please enter a valid birth date"

    if birth_date > today:
        return "Birth date cannot be in the future"
    # Calendar-year difference, matching what the form shows.
    age = today.year - birth_date.year
    if age > 120:
        return "Please enter a valid birth date"
    if age < 13:
        return "You must be at least 13 years old"
    return None


def validate_profile(data: Mapping[str, Any], *, today: date | None = None) -> dict[str, str]:
    """Validate personal details and social links.

    Args:
        data: Form values keyed ``firstName``, ``lastName``, ``phone``,
            ``bio``, ``gender``, ``birthDate`` (ISO date) and
            ``socialLinks`` (platform -> URL).
        today: Reference date for the age checks; defaults to today.

    Returns:
        Field name -> error message.
    """
    today = today or date.today()
    errors: dict[str, str] = {}

    for key, label in (("firstName", "First name"), ("lastName", "Last name")):
        value = _text(data, key)
        if value:
            message = _check_name(value, label)
            if message:
                errors[key] = message

    phone = _text(data, "phone")
    if phone and not _PHONE.match(re.sub(r"\s", "", phone)):
        errors["phone"] = "Invalid phone number format"

    bio = _text(data, "bio")
    if len(bio) > 300:
        errors["bio"] = "Bio cannot exceed 300 characters"

    gender = _text(data, "gender")
    if gender and gender.lower() not in GENDERS:
        errors["gender"] = "Please select a valid gender"

    birth_date = _text(data, "birthDate")
    if birth_date:
        message = _check_birth_date(birth_date, today)
        if message:
            errors["birthDate"] = message

    links = data.get("socialLinks")
    if isinstance(links, Mapping):
        for platform, label in SOCIAL_PLATFORMS.items():
            url = links.get(platform)
            if isinstance(url, str) and url and not _URL.match(url):
                errors[platform] = f"Invalid {label} URL"

    return errors


def validate_address(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate ``country``, ``city`` and ``postalCode``.

    *data* may be the address itself or a profile holding it under
    ``address``.
    """
    address = data.get("address", data)
    if not isinstance(address, Mapping):
        return {}
    errors: dict[str, str] = {}

    country = _text(address, "country")
    if country:
        if not _COUNTRY.match(country):
            errors["country"] = "Country name can only contain letters"
        elif len(country) > 100:
            errors["country"] = "Country name cannot exceed 100 characters"
        elif len(country.strip()) < 2:
            errors["country"] = "Country name must be at least 2 characters"

    city = _text(address, "city")
    if city:
        if not _CITY.match(city):
            errors["city"] = "City name contains invalid characters"
        elif len(city) > 100:
            errors["city"] = "City name cannot exceed 100 characters"
        elif len(city.strip()) < 2:
            errors["city"] = "City name must be at least 2 characters"

    postal_code = _text(address, "postalCode").strip()
    if postal_code:
        if not _POSTAL_CODE.match(postal_code):
            errors["postalCode"] = "Postal code contains invalid characters"
        elif len(postal_code) > 10:
            errors["postalCode"] = "Postal code cannot exceed 10 characters"
        elif len(postal_code) < 3:
            errors["postalCode"] = "Postal code must be at least 3 characters"

    return errors
