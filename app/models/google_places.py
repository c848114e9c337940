"""
Pydantic models for the two generations of Google Places payloads.

`LegacyPlace` mirrors the Place Details JSON of the classic Places API
(snake_case, `geometry.location.lat/lng`, `photo_reference`). `NewPlace`
mirrors the Places API (New) v1 resource (camelCase, `location.latitude`,
photo resource names). Every field is optional: both APIs omit whatever the
field mask or the place itself does not provide.
"""
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.models.assets import CamelModel


# ---------------------------------------------------------------------------
# Legacy Places API
# ---------------------------------------------------------------------------

class LegacyModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class LegacyLatLng(LegacyModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class LegacyViewport(LegacyModel):
    northeast: Optional[LegacyLatLng] = None
    southwest: Optional[LegacyLatLng] = None


class LegacyGeometry(LegacyModel):
    location: Optional[LegacyLatLng] = None
    viewport: Optional[LegacyViewport] = None


class LegacyPhoto(LegacyModel):
    photo_reference: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    html_attributions: List[str] = Field(default_factory=list)


class LegacyPeriodPoint(LegacyModel):
    day: Optional[int] = None
    time: Optional[str] = None


class LegacyPeriod(LegacyModel):
    open: Optional[LegacyPeriodPoint] = None
    close: Optional[LegacyPeriodPoint] = None


class LegacyOpeningHours(LegacyModel):
    open_now: Optional[bool] = None
    periods: Optional[List[LegacyPeriod]] = None
    weekday_text: Optional[List[str]] = None


class LegacyReview(LegacyModel):
    author_name: Optional[str] = None
    author_url: Optional[str] = None
    profile_photo_url: Optional[str] = None
    language: Optional[str] = None
    rating: Optional[float] = None
    relative_time_description: Optional[str] = None
    time: Optional[Union[int, str]] = None
    text: Optional[str] = None


class LegacyPlace(LegacyModel):
    place_id: Optional[str] = None
    name: Optional[str] = None
    formatted_address: Optional[str] = None
    vicinity: Optional[str] = None
    geometry: Optional[LegacyGeometry] = None
    business_status: Optional[str] = None
    formatted_phone_number: Optional[str] = None
    international_phone_number: Optional[str] = None
    website: Optional[str] = None
    url: Optional[str] = None
    types: Optional[List[str]] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    price_level: Optional[int] = None
    opening_hours: Optional[LegacyOpeningHours] = None
    current_opening_hours: Optional[LegacyOpeningHours] = None
    photos: Optional[List[LegacyPhoto]] = None
    reviews: Optional[List[LegacyReview]] = None
    wheelchair_accessible_entrance: Optional[bool] = None
    reservable: Optional[bool] = None
    serves_dessert: Optional[bool] = None
    serves_coffee: Optional[bool] = None
    editorial_summary: Optional[dict] = None


# ---------------------------------------------------------------------------
# Places API (New)
# ---------------------------------------------------------------------------

class NewModel(CamelModel):
    model_config = ConfigDict(extra="ignore")


class NewLocalizedText(NewModel):
    text: Optional[str] = None
    language_code: Optional[str] = None


class NewLatLng(NewModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class NewPeriodPoint(NewModel):
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None


class NewPeriod(NewModel):
    open: Optional[NewPeriodPoint] = None
    close: Optional[NewPeriodPoint] = None


class NewOpeningHours(NewModel):
    open_now: Optional[bool] = None
    periods: Optional[List[NewPeriod]] = None
    weekday_descriptions: Optional[List[str]] = None
    secondary_hours_type: Optional[str] = None


class NewAuthorAttribution(NewModel):
    display_name: Optional[str] = None
    uri: Optional[str] = None
    photo_uri: Optional[str] = None


class NewPhoto(NewModel):
    name: Optional[str] = None
    width_px: Optional[int] = None
    height_px: Optional[int] = None
    author_attributions: Optional[List[NewAuthorAttribution]] = None


class NewReview(NewModel):
    name: Optional[str] = None
    relative_publish_time_description: Optional[str] = None
    rating: Optional[float] = None
    text: Optional[NewLocalizedText] = None
    original_text: Optional[NewLocalizedText] = None
    author_attribution: Optional[NewAuthorAttribution] = None
    publish_time: Optional[str] = None


class NewPlace(NewModel):
    id: Optional[str] = None
    display_name: Optional[NewLocalizedText] = None
    formatted_address: Optional[str] = None
    short_formatted_address: Optional[str] = None
    location: Optional[NewLatLng] = None
    rating: Optional[float] = None
    user_rating_count: Optional[int] = None
    google_maps_uri: Optional[str] = None
    website_uri: Optional[str] = None
    international_phone_number: Optional[str] = None
    business_status: Optional[str] = None
    regular_opening_hours: Optional[NewOpeningHours] = None
    regular_secondary_opening_hours: Optional[List[NewOpeningHours]] = None
    current_opening_hours: Optional[NewOpeningHours] = None
    primary_type: Optional[str] = None
    types: Optional[List[str]] = None
    photos: Optional[List[NewPhoto]] = None
    parking_options: Optional[dict] = None
    payment_options: Optional[dict] = None
    accessibility_options: Optional[dict] = None
    editorial_summary: Optional[NewLocalizedText] = None
    price_level: Optional[str] = None
    reviews: Optional[List[NewReview]] = None
    allows_dogs: Optional[bool] = None
    restroom: Optional[bool] = None
    # Dine-in attributes are top-level booleans in the v1 resource
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


def parse_legacy_place(raw: Any) -> LegacyPlace:
    return raw if isinstance(raw, LegacyPlace) else LegacyPlace.model_validate(raw)


def parse_new_place(raw: Any) -> NewPlace:
    return raw if isinstance(raw, NewPlace) else NewPlace.model_validate(raw)
