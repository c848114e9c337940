"""Client to interact with the Google Places API (legacy and New)."""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from app.models.errors import PlaceProviderError

logger = logging.getLogger(__name__)

LEGACY_BASE = "https://maps.googleapis.com/maps/api/place"
PLACES_BASE = "https://places.googleapis.com/v1"

LEGACY_DETAIL_FIELDS = [
    "place_id",
    "name",
    "formatted_address",
    "vicinity",
    "geometry",
    "photos",
    "types",
    "rating",
    "user_ratings_total",
    "price_level",
    "opening_hours",
    "current_opening_hours",
    "reviews",
    "website",
    "url",
    "international_phone_number",
    "business_status",
    "wheelchair_accessible_entrance",
    "reservable",
    "serves_dessert",
    "serves_coffee",
    "editorial_summary",
]

NEW_DETAIL_FIELDS = [
    "id",
    "displayName",
    "formattedAddress",
    "shortFormattedAddress",
    "location",
    "rating",
    "userRatingCount",
    "googleMapsUri",
    "websiteUri",
    "internationalPhoneNumber",
    "businessStatus",
    "regularOpeningHours",
    "regularSecondaryOpeningHours",
    "currentOpeningHours",
    "primaryType",
    "types",
    "photos",
    "parkingOptions",
    "paymentOptions",
    "accessibilityOptions",
    "editorialSummary",
    "priceLevel",
    "reviews",
    "allowsDogs",
    "restroom",
    "reservable",
    "servesCocktails",
    "servesDessert",
    "servesCoffee",
    "outdoorSeating",
    "liveMusic",
    "menuForChildren",
    "goodForChildren",
    "goodForGroups",
    "goodForWatchingSports",
]

# Search results skip photos and reviews; they are only needed on registration
NEW_SEARCH_FIELDS = [
    "places.id",
    "places.displayName",
    "places.formattedAddress",
    "places.shortFormattedAddress",
    "places.location",
    "places.rating",
    "places.userRatingCount",
    "places.googleMapsUri",
    "places.websiteUri",
    "places.primaryType",
    "places.types",
    "places.priceLevel",
]

LEGACY_MISSING_STATUSES = {"NOT_FOUND", "ZERO_RESULTS", "INVALID_REQUEST"}


class GooglePlacesClient:
    """HTTP client wrapper for both generations of the Google Places API."""

    def __init__(
        self,
        api_key: str,
        api_version: str = "new",
        timeout: float = 20.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.api_key = api_key
        self.api_version = api_version
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._client.aclose()

    def _new_headers(self, field_mask: List[str]) -> Dict[str, str]:
        return {
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": ",".join(field_mask),
        }

    async def get_place(self, place_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch place details from the configured API generation.

        Returns:
            The raw place payload, or None if the provider does not know the place

        Raises:
            PlaceProviderError: On any other provider failure
        """
        if self.api_version == "legacy":
            return await self.get_place_legacy(place_id)
        return await self.get_place_new(place_id)

    async def get_place_new(self, place_id: str) -> Optional[Dict[str, Any]]:
        logger.debug(f"Fetching place details for ID: {place_id}")
        try:
            response = await self._client.get(
                f"{PLACES_BASE}/places/{place_id}",
                headers=self._new_headers(NEW_DETAIL_FIELDS),
            )
            if response.status_code in (400, 404):
                logger.warning(f"Place not found by provider: {place_id} ({response.status_code})")
                return None
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Places API error: {exc.response.status_code} - {exc.response.text}")
            raise PlaceProviderError(f"Places API error: {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error(f"Failed to reach Places API: {exc}")
            raise PlaceProviderError(f"Failed to reach Places API: {exc}") from exc

        logger.debug(f"Place details fetched successfully: {place_id}")
        return response.json()

    async def get_place_legacy(self, place_id: str) -> Optional[Dict[str, Any]]:
        logger.debug(f"Fetching legacy place details for ID: {place_id}")
        payload = await self._legacy_get(
            "details/json",
            {"place_id": place_id, "fields": ",".join(LEGACY_DETAIL_FIELDS)},
        )
        if payload.get("status") in LEGACY_MISSING_STATUSES:
            logger.warning(f"Place not found by provider: {place_id} ({payload.get('status')})")
            return None
        return payload.get("result")

    async def search_text(self, query: str) -> List[Dict[str, Any]]:
        """Search places matching a free-text query."""
        logger.debug(f"Searching places with query: {query}")
        if self.api_version == "legacy":
            payload = await self._legacy_get("textsearch/json", {"query": query})
            return payload.get("results", [])

        payload = await self._new_post(
            "places:searchText",
            {"textQuery": query},
            NEW_SEARCH_FIELDS,
        )
        return payload.get("places", [])

    async def search_nearby(
        self,
        lat: float,
        lng: float,
        radius: int = 1000,
        place_type: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Find places within `radius` meters of a coordinate."""
        logger.debug(f"Finding places near [{lat}, {lng}] within {radius}m")
        if self.api_version == "legacy":
            params: Dict[str, Any] = {"location": f"{lat},{lng}", "radius": radius}
            if place_type:
                params["type"] = place_type
            payload = await self._legacy_get("nearbysearch/json", params)
            return payload.get("results", [])

        body: Dict[str, Any] = {
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": lat, "longitude": lng},
                    "radius": float(radius),
                }
            }
        }
        if place_type:
            body["includedTypes"] = [place_type]
        payload = await self._new_post("places:searchNearby", body, NEW_SEARCH_FIELDS)
        return payload.get("places", [])

    def get_photo_url(self, photo_reference: str, max_width: int = 800) -> str:
        """Build a legacy photo URL for a photo reference."""
        query = urlencode(
            {"maxwidth": max_width, "photoreference": photo_reference, "key": self.api_key}
        )
        return f"{LEGACY_BASE}/photo?{query}"

    async def resolve_photo_url(self, photo_name: str, max_width: int = 800) -> Optional[str]:
        """Resolve a short-lived photo URI for a Places API (New) photo resource."""
        try:
            response = await self._client.get(
                f"{PLACES_BASE}/{photo_name}/media",
                headers={"X-Goog-Api-Key": self.api_key},
                params={"maxWidthPx": max_width, "skipHttpRedirect": "true"},
            )
            response.raise_for_status()
            return response.json().get("photoUri")
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Failed to resolve photo URI for {photo_name}: {exc}")
            return None

    async def _legacy_get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self._client.get(
                f"{LEGACY_BASE}/{path}",
                params={**params, "key": self.api_key},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Places API error: {exc.response.status_code} - {exc.response.text}")
            raise PlaceProviderError(f"Places API error: {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error(f"Failed to reach Places API: {exc}")
            raise PlaceProviderError(f"Failed to reach Places API: {exc}") from exc

        payload = response.json()
        status = payload.get("status", "OK")
        if status not in ("OK", *LEGACY_MISSING_STATUSES):
            message = payload.get("error_message") or status
            logger.error(f"Places API returned {status}: {message}")
            raise PlaceProviderError(f"Places API error: {message}")
        return payload

    async def _new_post(
        self,
        path: str,
        body: Dict[str, Any],
        field_mask: List[str],
    ) -> Dict[str, Any]:
        try:
            response = await self._client.post(
                f"{PLACES_BASE}/{path}",
                json=body,
                headers=self._new_headers(field_mask),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Places API error: {exc.response.status_code} - {exc.response.text}")
            raise PlaceProviderError(f"Places API error: {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error(f"Failed to reach Places API: {exc}")
            raise PlaceProviderError(f"Failed to reach Places API: {exc}") from exc
        return response.json()
