"""
Normalizers that turn Google Places payloads into the persisted Asset shape.

Two provider generations are supported and both end up as the same
`AssetData`:
- the legacy Places API details payload (`map_legacy_place`, synchronous,
  photo URLs are built locally from the photo reference)
- the Places API (New) resource (`map_new_place`, asynchronous, each photo
  name has to be resolved through the media endpoint)

Optional boolean attributes stay `None` when the provider does not report
them: `None` means "unknown", never "no".
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from app.models.assets import (
    AccessibilityOptions,
    AssetData,
    AssetLocation,
    AssetPhoto,
    AssetReview,
    AuthorAttribution,
    DineInOptions,
    LocalizedText,
    OpeningHours,
    OpeningHoursPeriod,
    ParkingOptions,
    PaymentOptions,
    PriceLevel,
    SecondaryOpeningHours,
    TimePoint,
)
from app.models.errors import PlaceGeometryMissingError
from app.models.google_places import (
    LegacyOpeningHours,
    LegacyPeriodPoint,
    LegacyPhoto,
    LegacyPlace,
    LegacyReview,
    NewAuthorAttribution,
    NewOpeningHours,
    NewPeriodPoint,
    NewPhoto,
    NewPlace,
    NewReview,
    parse_legacy_place,
    parse_new_place,
)

logger = logging.getLogger(__name__)

MAX_PHOTO_WIDTH = 800

PRICE_LEVEL_UNSPECIFIED = "PRICE_LEVEL_UNSPECIFIED"

# Legacy API reports price as 0..4
LEGACY_PRICE_LEVELS = {
    0: PriceLevel.FREE,
    1: PriceLevel.INEXPENSIVE,
    2: PriceLevel.MODERATE,
    3: PriceLevel.EXPENSIVE,
    4: PriceLevel.VERY_EXPENSIVE,
}

PhotoUrlBuilder = Callable[[str, int], str]
PhotoResolver = Callable[[str, int], Awaitable[Optional[str]]]


def capped_photo_width(width: Optional[int]) -> int:
    """Width to request for a displayable photo URL (never above 800px)."""
    return min(width or MAX_PHOTO_WIDTH, MAX_PHOTO_WIDTH)


def parse_review_time(value: Union[int, float, str, None]) -> Optional[int]:
    """Parse numeric-looking review times; numbers pass through unchanged."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return int(value.strip(), 10)
    except ValueError:
        logger.debug(f"Ignoring non-numeric review time: {value!r}")
        return None


def normalize_price_level(value: Any) -> Optional[PriceLevel]:
    """Keep recognized price levels, drop the unspecified sentinel and unknowns."""
    if value is None or value == PRICE_LEVEL_UNSPECIFIED:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return LEGACY_PRICE_LEVELS.get(value)
    try:
        return PriceLevel(value)
    except ValueError:
        logger.debug(f"Ignoring unrecognized price level: {value!r}")
        return None


# ---------------------------------------------------------------------------
# Option groups
# ---------------------------------------------------------------------------

def _flag(source: Optional[Dict[str, Any]], key: str) -> Optional[bool]:
    if not source:
        return None
    value = source.get(key)
    return value if isinstance(value, bool) else None


def build_parking_options(raw: Optional[Dict[str, Any]]) -> Optional[ParkingOptions]:
    if raw is None:
        return None
    return ParkingOptions(
        free_parking_lot=_flag(raw, "freeParkingLot"),
        paid_parking_lot=_flag(raw, "paidParkingLot"),
        free_street_parking=_flag(raw, "freeStreetParking"),
        valet_parking=_flag(raw, "valetParking"),
        free_garage_parking=_flag(raw, "freeGarageParking"),
        paid_garage_parking=_flag(raw, "paidGarageParking"),
    )


def build_payment_options(raw: Optional[Dict[str, Any]]) -> Optional[PaymentOptions]:
    if raw is None:
        return None
    return PaymentOptions(
        accepts_credit_cards=_flag(raw, "acceptsCreditCards"),
        accepts_debit_cards=_flag(raw, "acceptsDebitCards"),
        accepts_cash_only=_flag(raw, "acceptsCashOnly"),
        accepts_nfc=_flag(raw, "acceptsNfc"),
    )


def build_accessibility_options(
    raw: Optional[Dict[str, Any]],
) -> Optional[AccessibilityOptions]:
    if raw is None:
        return None
    return AccessibilityOptions(
        wheelchair_accessible_parking=_flag(raw, "wheelchairAccessibleParking"),
        wheelchair_accessible_entrance=_flag(raw, "wheelchairAccessibleEntrance"),
        wheelchair_accessible_restroom=_flag(raw, "wheelchairAccessibleRestroom"),
        wheelchair_accessible_seating=_flag(raw, "wheelchairAccessibleSeating"),
    )


DINE_IN_FIELDS = (
    "reservable",
    "serves_cocktails",
    "serves_dessert",
    "serves_coffee",
    "outdoor_seating",
    "live_music",
    "menu_for_children",
    "good_for_children",
    "good_for_groups",
    "good_for_watching_sports",
)


def build_dine_in_options(source: Any) -> Optional[DineInOptions]:
    """
    Collect the dine-in booleans found as attributes of `source`.

    Returns None when the provider reported none of them.
    """
    values = {field: getattr(source, field, None) for field in DINE_IN_FIELDS}
    if all(value is None for value in values.values()):
        return None
    return DineInOptions(**values)


# ---------------------------------------------------------------------------
# Legacy Places API
# ---------------------------------------------------------------------------

def _legacy_time_point(point: Optional[LegacyPeriodPoint]) -> TimePoint:
    if point is None:
        return TimePoint()
    raw_time = (point.time or "").strip()
    hour = minute = 0
    if len(raw_time) == 4 and raw_time.isdigit():
        hour, minute = int(raw_time[:2]), int(raw_time[2:])
    return TimePoint(day=point.day or 0, hour=hour, minute=minute)


def _legacy_opening_hours(hours: Optional[LegacyOpeningHours]) -> Optional[OpeningHours]:
    if hours is None:
        return None
    return OpeningHours(
        periods=[
            OpeningHoursPeriod(
                open=_legacy_time_point(period.open),
                close=_legacy_time_point(period.close),
            )
            for period in hours.periods or []
        ],
        weekday_descriptions=list(hours.weekday_text or []),
    )


def _legacy_photo(
    photo: LegacyPhoto,
    photo_url_builder: Optional[PhotoUrlBuilder],
) -> AssetPhoto:
    reference = photo.photo_reference or ""
    mapped = AssetPhoto(
        name=reference,
        width_px=photo.width or 0,
        height_px=photo.height or 0,
        author_attributions=[
            AuthorAttribution(display_name=attribution)
            for attribution in photo.html_attributions
        ],
    )
    if photo_url_builder and reference:
        mapped.photo_url = photo_url_builder(reference, capped_photo_width(photo.width))
    return mapped


def _legacy_review(review: LegacyReview) -> AssetReview:
    return AssetReview(
        name=review.author_name or "",
        relative_publish_time_description=review.relative_time_description or "",
        rating=review.rating or 0,
        text=LocalizedText(text=review.text or "", language_code=review.language or ""),
        author_attribution=AuthorAttribution(
            display_name=review.author_name or "",
            uri=review.author_url or "",
            photo_uri=review.profile_photo_url or "",
        ),
        time=parse_review_time(review.time),
    )


def map_legacy_place(
    raw_place: Union[LegacyPlace, Dict[str, Any]],
    ai_description: Optional[str] = None,
    ai_tags: Optional[List[str]] = None,
    ai_landing_page: Optional[str] = None,
    photo_url_builder: Optional[PhotoUrlBuilder] = None,
) -> AssetData:
    """
    Map a legacy Place Details payload to the Asset shape.

    Args:
        raw_place: Legacy place payload (model or raw dict)
        ai_description: Already generated description, if any
        ai_tags: Already generated tags, if any
        ai_landing_page: Already generated landing page, if any
        photo_url_builder: Builds a display URL from (reference, max_width)

    Raises:
        PlaceGeometryMissingError: If the place has no coordinates
    """
    place = parse_legacy_place(raw_place)

    location = place.geometry.location if place.geometry else None
    if location is None or location.lat is None or location.lng is None:
        raise PlaceGeometryMissingError(place.place_id)

    types = list(place.types or [])
    editorial = place.editorial_summary or {}

    accessibility = None
    if place.wheelchair_accessible_entrance is not None:
        accessibility = AccessibilityOptions(
            wheelchair_accessible_entrance=place.wheelchair_accessible_entrance
        )

    return AssetData(
        external_id=place.place_id or "",
        display_name=LocalizedText(text=place.name or ""),
        formatted_address=place.formatted_address or "",
        short_formatted_address=place.vicinity,
        location=AssetLocation(latitude=location.lat, longitude=location.lng),
        rating=place.rating,
        user_rating_count=place.user_ratings_total,
        google_maps_uri=place.url or "",
        website_uri=place.website,
        international_phone_number=place.international_phone_number,
        business_status=place.business_status,
        regular_opening_hours=_legacy_opening_hours(place.opening_hours),
        current_opening_hours=_legacy_opening_hours(place.current_opening_hours),
        primary_type=types[0] if types else "",
        types=types,
        photos=[
            _legacy_photo(photo, photo_url_builder)
            for photo in place.photos or []
            if photo.photo_reference
        ],
        accessibility_options=accessibility,
        dine_in_options=build_dine_in_options(place),
        editorial_summary=(
            LocalizedText(
                text=editorial.get("overview", ""),
                language_code=editorial.get("language", ""),
            )
            if editorial.get("overview")
            else None
        ),
        price_level=normalize_price_level(place.price_level),
        reviews=[_legacy_review(review) for review in place.reviews or []],
        ai_description=ai_description,
        ai_tags=ai_tags,
        ai_landing_page=ai_landing_page,
    )


# ---------------------------------------------------------------------------
# Places API (New)
# ---------------------------------------------------------------------------

def _new_time_point(point: Optional[NewPeriodPoint]) -> TimePoint:
    if point is None:
        return TimePoint()
    return TimePoint(day=point.day or 0, hour=point.hour or 0, minute=point.minute or 0)


def _new_periods(hours: NewOpeningHours) -> List[OpeningHoursPeriod]:
    return [
        OpeningHoursPeriod(open=_new_time_point(period.open), close=_new_time_point(period.close))
        for period in hours.periods or []
    ]


def _new_opening_hours(hours: Optional[NewOpeningHours]) -> Optional[OpeningHours]:
    if hours is None:
        return None
    return OpeningHours(
        periods=_new_periods(hours),
        weekday_descriptions=list(hours.weekday_descriptions or []),
    )


def _new_secondary_hours(
    hours_list: Optional[List[NewOpeningHours]],
) -> Optional[List[SecondaryOpeningHours]]:
    if hours_list is None:
        return None
    return [
        SecondaryOpeningHours(
            periods=_new_periods(hours),
            weekday_descriptions=list(hours.weekday_descriptions or []),
            secondary_hours_type=hours.secondary_hours_type or "",
        )
        for hours in hours_list
    ]


def _new_attribution(attribution: Optional[NewAuthorAttribution]) -> AuthorAttribution:
    if attribution is None:
        return AuthorAttribution()
    return AuthorAttribution(
        display_name=attribution.display_name or "",
        uri=attribution.uri or "",
        photo_uri=attribution.photo_uri or "",
    )


def _new_review(review: NewReview) -> AssetReview:
    text = review.text or review.original_text
    return AssetReview(
        name=review.name or "",
        relative_publish_time_description=review.relative_publish_time_description or "",
        rating=review.rating or 0,
        text=LocalizedText(
            text=(text.text if text else None) or "",
            language_code=(text.language_code if text else None) or "",
        ),
        author_attribution=_new_attribution(review.author_attribution),
    )


async def _new_photo(
    photo: NewPhoto,
    photo_resolver: Optional[PhotoResolver],
) -> Optional[AssetPhoto]:
    mapped = AssetPhoto(
        name=photo.name,
        width_px=photo.width_px or 0,
        height_px=photo.height_px or 0,
        author_attributions=[
            _new_attribution(attribution) for attribution in photo.author_attributions or []
        ],
    )
    if photo_resolver is None:
        return mapped

    photo_url = await photo_resolver(photo.name, capped_photo_width(photo.width_px))
    if not photo_url:
        logger.debug(f"Dropping photo without resolvable media: {photo.name}")
        return None
    mapped.photo_url = photo_url
    return mapped


async def map_new_place(
    raw_place: Union[NewPlace, Dict[str, Any]],
    ai_description: Optional[str] = None,
    ai_tags: Optional[List[str]] = None,
    ai_landing_page: Optional[str] = None,
    photo_resolver: Optional[PhotoResolver] = None,
) -> AssetData:
    """
    Map a Places API (New) resource to the Asset shape.

    Photo names are resolved concurrently through `photo_resolver`; the
    resulting list keeps the provider's order and drops photos that resolve
    to nothing.

    Raises:
        PlaceGeometryMissingError: If the place has no coordinates
    """
    place = parse_new_place(raw_place)

    location = place.location
    if location is None or location.latitude is None or location.longitude is None:
        raise PlaceGeometryMissingError(place.id)

    display_name = place.display_name

    resolved = await asyncio.gather(
        *[_new_photo(photo, photo_resolver) for photo in place.photos or [] if photo.name]
    )
    photos = [photo for photo in resolved if photo is not None]

    return AssetData(
        external_id=place.id or "",
        display_name=LocalizedText(
            text=(display_name.text if display_name else None) or "",
            language_code=(display_name.language_code if display_name else None) or "",
        ),
        formatted_address=place.formatted_address or "",
        short_formatted_address=place.short_formatted_address,
        location=AssetLocation(latitude=location.latitude, longitude=location.longitude),
        rating=place.rating,
        user_rating_count=place.user_rating_count,
        google_maps_uri=place.google_maps_uri or "",
        website_uri=place.website_uri,
        international_phone_number=place.international_phone_number,
        business_status=place.business_status,
        regular_opening_hours=_new_opening_hours(place.regular_opening_hours),
        regular_secondary_opening_hours=_new_secondary_hours(place.regular_secondary_opening_hours),
        current_opening_hours=_new_opening_hours(place.current_opening_hours),
        primary_type=place.primary_type or "",
        types=list(place.types or []),
        photos=photos,
        parking_options=build_parking_options(place.parking_options),
        payment_options=build_payment_options(place.payment_options),
        accessibility_options=build_accessibility_options(place.accessibility_options),
        dine_in_options=build_dine_in_options(place),
        editorial_summary=(
            LocalizedText(
                text=place.editorial_summary.text or "",
                language_code=place.editorial_summary.language_code or "",
            )
            if place.editorial_summary
            else None
        ),
        price_level=normalize_price_level(place.price_level),
        reviews=[_new_review(review) for review in place.reviews or []],
        allows_dogs=place.allows_dogs,
        has_restroom=place.restroom,
        ai_description=ai_description,
        ai_tags=ai_tags,
        ai_landing_page=ai_landing_page,
    )


async def map_provider_place(
    raw_place: Dict[str, Any],
    api_version: str,
    ai_description: Optional[str] = None,
    ai_tags: Optional[List[str]] = None,
    ai_landing_page: Optional[str] = None,
    photo_url_builder: Optional[PhotoUrlBuilder] = None,
    photo_resolver: Optional[PhotoResolver] = None,
) -> AssetData:
    """Dispatch a raw provider payload to the mapper of its API generation."""
    if api_version == "legacy":
        return map_legacy_place(
            raw_place,
            ai_description=ai_description,
            ai_tags=ai_tags,
            ai_landing_page=ai_landing_page,
            photo_url_builder=photo_url_builder,
        )
    return await map_new_place(
        raw_place,
        ai_description=ai_description,
        ai_tags=ai_tags,
        ai_landing_page=ai_landing_page,
        photo_resolver=photo_resolver,
    )
