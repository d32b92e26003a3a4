"""Pydantic schemas for profile validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AddressPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    country: str = ""
    city: str = ""
    postal_code: str = Field("", alias="postalCode")


class ProfilePayload(BaseModel):
    """Profile form values, keyed as the profile form sends them."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    phone: str = ""
    bio: str = ""
    gender: str = ""
    birth_date: str = Field("", alias="birthDate")
    social_links: dict[str, str] = Field(default_factory=dict, alias="socialLinks")
    address: AddressPayload | None = None


class ValidationResponse(BaseModel):
    valid: bool
    errors: dict[str, str] = Field(default_factory=dict, description="Field name -> message")
