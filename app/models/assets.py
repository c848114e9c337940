"""Pydantic models for persisted Assets."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Category(str, Enum):
    """High-level asset categories assigned by the generation provider."""
    CULTURAL = "Cultural"
    ENTERTAINMENT = "Entertainment"
    COMMERCE = "Commerce"
    TRANSPORTATION = "Transportation"
    PUBLIC_SERVICES = "PublicServices"
    DEFAULT = "Default"


class PriceLevel(str, Enum):
    FREE = "PRICE_LEVEL_FREE"
    INEXPENSIVE = "PRICE_LEVEL_INEXPENSIVE"
    MODERATE = "PRICE_LEVEL_MODERATE"
    EXPENSIVE = "PRICE_LEVEL_EXPENSIVE"
    VERY_EXPENSIVE = "PRICE_LEVEL_VERY_EXPENSIVE"


class LocalizedText(CamelModel):
    text: str = ""
    language_code: str = ""


class AssetLocation(CamelModel):
    latitude: float
    longitude: float


class TimePoint(CamelModel):
    day: int = 0
    hour: int = 0
    minute: int = 0


class OpeningHoursPeriod(CamelModel):
    open: TimePoint = Field(default_factory=TimePoint)
    close: TimePoint = Field(default_factory=TimePoint)


class OpeningHours(CamelModel):
    periods: List[OpeningHoursPeriod] = Field(default_factory=list)
    weekday_descriptions: List[str] = Field(default_factory=list)


class SecondaryOpeningHours(OpeningHours):
    secondary_hours_type: str = ""


class AuthorAttribution(CamelModel):
    display_name: str = ""
    uri: str = ""
    photo_uri: str = ""


class AssetPhoto(CamelModel):
    name: str
    width_px: int = 0
    height_px: int = 0
    author_attributions: List[AuthorAttribution] = Field(default_factory=list)
    photo_url: Optional[str] = None


class ParkingOptions(CamelModel):
    free_parking_lot: Optional[bool] = None
    paid_parking_lot: Optional[bool] = None
    free_street_parking: Optional[bool] = None
    valet_parking: Optional[bool] = None
    free_garage_parking: Optional[bool] = None
    paid_garage_parking: Optional[bool] = None


class PaymentOptions(CamelModel):
    accepts_credit_cards: Optional[bool] = None
    accepts_debit_cards: Optional[bool] = None
    accepts_cash_only: Optional[bool] = None
    accepts_nfc: Optional[bool] = None


class AccessibilityOptions(CamelModel):
    wheelchair_accessible_parking: Optional[bool] = None
    wheelchair_accessible_entrance: Optional[bool] = None
    wheelchair_accessible_restroom: Optional[bool] = None
    wheelchair_accessible_seating: Optional[bool] = None


class DineInOptions(CamelModel):
    reservable: Optional[bool] = None
    serves_cocktails: Optional[bool] = None
    serves_dessert: Optional[bool] = None
    serves_coffee: Optional[bool] = None
    outdoor_seating: Optional[bool] = None
    live_music: Optional[bool] = None
    menu_for_children: Optional[bool] = None
    good_for_children: Optional[bool] = None
    good_for_groups: Optional[bool] = None
    good_for_watching_sports: Optional[bool] = None


class AssetReview(CamelModel):
    name: str = ""
    relative_publish_time_description: str = ""
    rating: float = 0
    text: LocalizedText = Field(default_factory=LocalizedText)
    author_attribution: AuthorAttribution = Field(default_factory=AuthorAttribution)
    # Unix seconds; only legacy reviews carry it
    time: Optional[int] = None


class AssetData(CamelModel):
    """
    Normalized place content, as produced by the mappers.

    Everything the provider can supply plus the AI-generated fields. Storage
    metadata (internal id, timestamps) lives on `Asset`.
    """

    external_id: str
    display_name: LocalizedText
    formatted_address: str = ""
    short_formatted_address: Optional[str] = None
    location: AssetLocation
    rating: Optional[float] = None
    user_rating_count: Optional[int] = None
    google_maps_uri: str = ""
    website_uri: Optional[str] = None
    international_phone_number: Optional[str] = None
    business_status: Optional[str] = None

    category: Optional[Category] = None

    regular_opening_hours: Optional[OpeningHours] = None
    regular_secondary_opening_hours: Optional[List[SecondaryOpeningHours]] = None
    current_opening_hours: Optional[OpeningHours] = None

    primary_type: str = ""
    types: List[str] = Field(default_factory=list)

    photos: List[AssetPhoto] = Field(default_factory=list)

    parking_options: Optional[ParkingOptions] = None
    payment_options: Optional[PaymentOptions] = None
    accessibility_options: Optional[AccessibilityOptions] = None
    dine_in_options: Optional[DineInOptions] = None

    editorial_summary: Optional[LocalizedText] = None
    price_level: Optional[PriceLevel] = None

    reviews: List[AssetReview] = Field(default_factory=list)

    allows_dogs: Optional[bool] = None
    has_restroom: Optional[bool] = None

    ai_description: Optional[str] = None
    ai_tags: Optional[List[str]] = None
    ai_landing_page: Optional[str] = None


class Asset(AssetData):
    """A persisted asset."""

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AssetUpdate(CamelModel):
    """Fields that may change after an asset is created."""

    category: Optional[Category] = None
    ai_description: Optional[str] = None
    ai_tags: Optional[List[str]] = None
    ai_landing_page: Optional[str] = None
