"""Pydantic models for place endpoints."""
from pydantic import Field

from app.models.assets import CamelModel


class RegisterPlaceRequest(CamelModel):
    """Registration request for a provider place."""
    place_id: str = Field(..., min_length=1, description="Google Place ID")


class DeletePlaceResponse(CamelModel):
    message: str
    place_id: str
