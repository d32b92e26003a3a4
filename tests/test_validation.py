"""Tests for profile and address validation."""

from datetime import date

import pytest

from cvinsight.services.validation import validate_address, validate_profile

TODAY = date(2024, 6, 1)


class TestValidateProfile:
    def test_valid_profile(self):
        data = {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "phone": "+1 555 0100",
            "bio": "Mathematician.",
            "gender": "Female",
            "birthDate": "1990-05-20T00:00:00.000Z",
            "socialLinks": {"github": "https://github.com/ada", "linkedin": "linkedin.com/in/ada"},
        }
        assert validate_profile(data, today=TODAY) == {}

    def test_blank_fields_are_optional(self):
        assert validate_profile({}, today=TODAY) == {}
        assert validate_profile({"firstName": "", "phone": "", "socialLinks": {"github": ""}}, today=TODAY) == {}

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("A", "First name must be at least 2 characters"),
            (" A ", "First name must be at least 2 characters"),
            ("A" * 51, "First name cannot exceed 50 characters"),
        ],
    )
    def test_first_name_length(self, value, message):
        assert validate_profile({"firstName": value}, today=TODAY) == {"firstName": message}

    def test_last_name_label(self):
        errors = validate_profile({"lastName": "L"}, today=TODAY)
        assert errors == {"lastName": "Last name must be at least 2 characters"}

    @pytest.mark.parametrize("phone", ["+15550100", "(555) 010 0100", "555-0100"])
    def test_phone_accepted(self, phone):
        assert "phone" not in validate_profile({"phone": phone}, today=TODAY)

    @pytest.mark.parametrize("phone", ["call me", "12345678901234567890", "+1-555-0100-99-88"])
    def test_phone_rejected(self, phone):
        assert validate_profile({"phone": phone}, today=TODAY)["phone"] == "Invalid phone number format"

    def test_bio_limit(self):
        assert validate_profile({"bio": "x" * 300}, today=TODAY) == {}
        assert validate_profile({"bio": "x" * 301}, today=TODAY) == {"bio": "Bio cannot exceed 300 characters"}

    def test_gender(self):
        assert validate_profile({"gender": "MALE"}, today=TODAY) == {}
        assert validate_profile({"gender": "other"}, today=TODAY) == {"gender": "Please select a valid gender"}

    @pytest.mark.parametrize(
        ("birth_date", "message"),
        [
            ("2030-01-01", "Birth date cannot be in the future"),
            ("1890-01-01", "Please enter a valid birth date"),
            ("2015-01-01", "You must be at least 13 years old"),
            ("20/05/1990", "Please enter a valid birth date"),
        ],
    )
    def test_birth_date(self, birth_date, message):
        assert validate_profile({"birthDate": birth_date}, today=TODAY) == {"birthDate": message}

    def test_age_uses_calendar_years(self):
        # Turns 13 later this year, already 13 by calendar year.
        assert validate_profile({"birthDate": "2011-12-31"}, today=TODAY) == {}

    def test_social_links(self):
        errors = validate_profile(
            {
                "socialLinks": {
                    "facebook": "not a url",
                    "twitter": "https://x.com/ada",
                    "instagram": "ftp://insta",
                    "github": "HTTPS://GITHUB.COM/ADA",
                }
            },
            today=TODAY,
        )
        assert errors == {
            "facebook": "Invalid Facebook URL",
            "instagram": "Invalid Instagram URL",
        }

    def test_twitter_label(self):
        errors = validate_profile({"socialLinks": {"twitter": "nope"}}, today=TODAY)
        assert errors == {"twitter": "Invalid X.com URL"}


class TestValidateAddress:
    def test_valid(self):
        assert validate_address({"country": "Côte d-Ivoire", "city": "Paris 15", "postalCode": "75015"}) == {}

    def test_nested_under_profile(self):
        errors = validate_address({"firstName": "Ada", "address": {"country": "F"}})
        assert errors == {"country": "Country name must be at least 2 characters"}

    def test_pattern_checked_before_length(self):
        errors = validate_address({"country": "1", "city": "St. Louis", "postalCode": "#"})
        assert errors == {
            "country": "Country name can only contain letters",
            "city": "City name contains invalid characters",
            "postalCode": "Postal code contains invalid characters",
        }

    def test_length_limits(self):
        errors = validate_address({"country": "a" * 101, "city": "b" * 101, "postalCode": "ABC-1234567"})
        assert errors == {
            "country": "Country name cannot exceed 100 characters",
            "city": "City name cannot exceed 100 characters",
            "postalCode": "Postal code cannot exceed 10 characters",
        }

    def test_postal_code_minimum(self):
        assert validate_address({"postalCode": " 12 "}) == {"postalCode": "Postal code must be at least 3 characters"}

    def test_missing_address(self):
        assert validate_address({"address": None}) == {}
