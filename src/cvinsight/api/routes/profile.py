"""Profile validation routes for the API."""

from __future__ import annotations

from fastapi import APIRouter

from cvinsight.api.schemas.profile import ProfilePayload, ValidationResponse
from cvinsight.services.validation import validate_address, validate_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.post("/validate", response_model=ValidationResponse)
def validate_profile_endpoint(payload: ProfilePayload) -> ValidationResponse:
    """Check profile and address fields and report one message per bad field."""
    data = payload.model_dump(by_alias=True, exclude_none=True)
    errors = validate_profile(data)
    if payload.address is not None:
        errors.update(validate_address(data["address"]))
    return ValidationResponse(valid=not errors, errors=errors)
