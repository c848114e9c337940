from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from app.config import Settings
from app.database import create_session_factory, init_models
from app.dependencies import ServiceContainer
from app.main import create_app
from app.models.assets import Category
from app.services.asset_content import AssetContentService
from app.services.registration import PlaceRegistrationService
from app.services.repositories import AssetRepository, UserRepository

ADMIN_EMAIL = "admin@example.com"

LEGACY_PLACE: Dict[str, Any] = {
    "place_id": "ChIJ-legacy-1",
    "name": "Cafe Central",
    "formatted_address": "Herrengasse 14, 1010 Wien, Austria",
    "vicinity": "Herrengasse 14, Wien",
    "geometry": {"location": {"lat": 48.2104, "lng": 16.3655}},
    "types": ["cafe", "restaurant", "food"],
    "rating": 4.4,
    "user_ratings_total": 1200,
    "price_level": 2,
    "url": "https://maps.google.com/?cid=1",
    "website": "https://cafecentral.wien",
    "opening_hours": {
        "periods": [
            {"open": {"day": 1, "time": "0800"}, "close": {"day": 1, "time": "2130"}},
            {"open": {"day": 2}},
        ],
        "weekday_text": ["Monday: 8:00 AM - 9:30 PM"],
    },
    "photos": [
        {
            "photo_reference": "ref-1",
            "width": 1200,
            "height": 900,
            "html_attributions": ["<a href=\"https://maps.google.com\">Jane</a>"],
        },
        {"width": 300, "height": 200},
    ],
    "reviews": [
        {
            "author_name": "Ana",
            "rating": 5,
            "relative_time_description": "a week ago",
            "time": "1700000000",
            "text": "Great coffee",
            "language": "en",
        }
    ],
    "serves_coffee": True,
}

NEW_PLACE: Dict[str, Any] = {
    "id": "ChIJ-new-1",
    "displayName": {"text": "Museo del Prado", "languageCode": "es"},
    "formattedAddress": "C. de Ruiz de Alarcon 23, Madrid",
    "location": {"latitude": 40.4138, "longitude": -3.6921},
    "rating": 4.8,
    "userRatingCount": 90000,
    "googleMapsUri": "https://maps.google.com/?cid=2",
    "primaryType": "museum",
    "types": ["museum", "tourist_attraction"],
    "photos": [
        {"name": "places/ChIJ-new-1/photos/a", "widthPx": 4000, "heightPx": 3000},
        {"name": "places/ChIJ-new-1/photos/b", "widthPx": 600, "heightPx": 400},
        {"name": "places/ChIJ-new-1/photos/c", "widthPx": 800, "heightPx": 600},
    ],
    "accessibilityOptions": {"wheelchairAccessibleEntrance": True},
    "priceLevel": "PRICE_LEVEL_UNSPECIFIED",
    "allowsDogs": False,
}


def legacy_place(**overrides: Any) -> Dict[str, Any]:
    place = copy.deepcopy(LEGACY_PLACE)
    place.update(overrides)
    return place


def new_place(**overrides: Any) -> Dict[str, Any]:
    place = copy.deepcopy(NEW_PLACE)
    place.update(overrides)
    return place


class FakePlacesClient:
    """Stands in for GooglePlacesClient; serves places from a dict."""

    def __init__(self, places: Optional[Dict[str, Dict[str, Any]]] = None, api_version: str = "legacy"):
        self.places = dict(places or {})
        self.api_version = api_version
        self.requested: List[str] = []
        self.search_results: List[Dict[str, Any]] = []

    async def get_place(self, place_id: str) -> Optional[Dict[str, Any]]:
        self.requested.append(place_id)
        place = self.places.get(place_id)
        return copy.deepcopy(place) if place is not None else None

    def get_photo_url(self, photo_reference: str, max_width: int = 800) -> str:
        return f"https://photos.test/{photo_reference}?maxwidth={max_width}"

    async def resolve_photo_url(self, photo_name: str, max_width: int = 800) -> Optional[str]:
        return f"https://media.test/{photo_name}?w={max_width}"

    async def search_text(self, query: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.search_results)

    async def search_nearby(self, lat, lng, radius=1000, place_type=None) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.search_results)

    async def close(self) -> None:
        pass


class FakeGenerator:
    """Stands in for ContentGenerator; any value may be an exception to raise."""

    def __init__(
        self,
        description: Any = "A classic Viennese coffee house.",
        tags: Any = None,
        category: Any = Category.CULTURAL,
        landing_page: Any = "<html><body>Cafe Central</body></html>",
    ):
        self.description = description
        self.tags = ["coffee", "historic"] if tags is None else tags
        self.category = category
        self.landing_page = landing_page
        self.calls: List[str] = []

    async def _result(self, name: str, value: Any) -> Any:
        self.calls.append(name)
        if isinstance(value, BaseException):
            raise value
        return value

    async def generate_description(self, asset):
        return await self._result("description", self.description)

    async def generate_tags(self, asset):
        return await self._result("tags", self.tags)

    async def classify_category(self, asset):
        return await self._result("category", self.category)

    async def generate_landing_page(self, asset):
        return await self._result("landing_page", self.landing_page)

    async def close(self) -> None:
        pass


def make_settings(tmp_path, **overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        "jwt_secret": "test-secret",
        "google_maps_api_key": "maps-key",
        "openai_api_key": "openai-key",
        "admin_emails": ADMIN_EMAIL,
        "places_api_version": "legacy",
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


async def build_test_services(
    settings: Settings,
    places_client: FakePlacesClient,
    generator: FakeGenerator,
) -> ServiceContainer:
    # NullPool: every session opens a fresh connection on the running loop
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    await init_models(engine)
    session_factory = create_session_factory(engine)
    assets = AssetRepository(session_factory)
    content = AssetContentService(generator)
    return ServiceContainer(
        settings=settings,
        places_client=places_client,
        generator=generator,
        users=UserRepository(session_factory),
        assets=assets,
        content=content,
        registration=PlaceRegistrationService(places_client, assets, content),
        engine=engine,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def places_client() -> FakePlacesClient:
    return FakePlacesClient(places={LEGACY_PLACE["place_id"]: LEGACY_PLACE})


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def services(settings, places_client, generator) -> ServiceContainer:
    return asyncio.run(build_test_services(settings, places_client, generator))


@pytest.fixture
def client(settings, services):
    app = create_app(settings=settings, services=services)
    with TestClient(app) as test_client:
        yield test_client
