from __future__ import annotations

import asyncio

import pytest

from app.models.assets import Category
from app.models.errors import ContentGenerationError, PlaceGeometryMissingError, PlaceNotFoundError
from tests.conftest import (
    LEGACY_PLACE,
    FakeGenerator,
    FakePlacesClient,
    build_test_services,
    legacy_place,
    new_place,
)

PLACE_ID = LEGACY_PLACE["place_id"]


def _run(settings, places_client, generator, scenario):
    async def main():
        services = await build_test_services(settings, places_client, generator)
        try:
            return await scenario(services)
        finally:
            await services.engine.dispose()

    return asyncio.run(main())


def test_register_creates_asset_with_ai_content(settings) -> None:
    places = FakePlacesClient(places={PLACE_ID: legacy_place()})

    async def scenario(services):
        result = await services.registration.register(PLACE_ID)
        stored = await services.assets.find_by_external_id(PLACE_ID)
        return result, stored

    result, stored = _run(settings, places, FakeGenerator(), scenario)

    assert result.created is True
    assert result.asset.ai_description == "A classic Viennese coffee house."
    assert result.asset.ai_tags == ["coffee", "historic"]
    assert result.asset.category is Category.CULTURAL
    assert result.asset.photos[0].photo_url == "https://photos.test/ref-1?maxwidth=800"
    assert stored.id == result.asset.id
    assert stored.ai_description == result.asset.ai_description


def test_register_is_idempotent(settings) -> None:
    places = FakePlacesClient(places={PLACE_ID: legacy_place()})
    generator = FakeGenerator()

    async def scenario(services):
        first = await services.registration.register(PLACE_ID)
        second = await services.registration.register(PLACE_ID)
        return first, second

    first, second = _run(settings, places, generator, scenario)

    assert first.created is True
    assert second.created is False
    assert second.asset.id == first.asset.id
    assert second.asset.ai_description == first.asset.ai_description
    # the provider and the generator are only used once
    assert places.requested == [PLACE_ID]
    assert generator.calls.count("description") == 1


def test_unknown_place_is_not_found(settings) -> None:
    async def scenario(services):
        with pytest.raises(PlaceNotFoundError):
            await services.registration.register("missing")
        return await services.assets.find_by_external_id("missing")

    assert _run(settings, FakePlacesClient(), FakeGenerator(), scenario) is None


def test_missing_geometry_persists_nothing(settings) -> None:
    places = FakePlacesClient(places={PLACE_ID: legacy_place(geometry=None)})
    generator = FakeGenerator()

    async def scenario(services):
        with pytest.raises(PlaceGeometryMissingError):
            await services.registration.register(PLACE_ID)
        return await services.assets.find_by_external_id(PLACE_ID)

    assert _run(settings, places, generator, scenario) is None
    assert generator.calls == []


def test_ai_failures_do_not_fail_registration(settings) -> None:
    places = FakePlacesClient(places={PLACE_ID: legacy_place()})
    generator = FakeGenerator(
        description=ContentGenerationError("down"),
        tags=ContentGenerationError("down"),
        category=Category.DEFAULT,
    )

    async def scenario(services):
        result = await services.registration.register(PLACE_ID)
        stored = await services.assets.find_by_external_id(PLACE_ID)
        return result, stored

    result, stored = _run(settings, places, generator, scenario)

    assert result.created is True
    assert stored.ai_description == ""
    assert stored.ai_tags == []
    assert stored.category is Category.DEFAULT


def test_register_new_api_place(settings) -> None:
    places = FakePlacesClient(places={"ChIJ-new-1": new_place()}, api_version="new")

    async def scenario(services):
        return await services.registration.register("ChIJ-new-1")

    result = _run(settings, places, FakeGenerator(), scenario)

    assert result.asset.display_name.text == "Museo del Prado"
    assert [photo.photo_url for photo in result.asset.photos] == [
        "https://media.test/places/ChIJ-new-1/photos/a?w=800",
        "https://media.test/places/ChIJ-new-1/photos/b?w=600",
        "https://media.test/places/ChIJ-new-1/photos/c?w=800",
    ]


def test_duplicate_insert_race_returns_existing_record(settings) -> None:
    places = FakePlacesClient(places={PLACE_ID: legacy_place()})

    async def scenario(services):
        winner = await services.registration.register(PLACE_ID)
        lookups = iter([None])
        original = services.assets.find_by_external_id

        async def stale_then_real(external_id):
            # first lookup misses, as if the other registration had not committed yet
            for value in lookups:
                return value
            return await original(external_id)

        services.assets.find_by_external_id = stale_then_real
        loser = await services.registration.register(PLACE_ID)
        return winner, loser

    winner, loser = _run(settings, places, FakeGenerator(), scenario)

    assert loser.created is False
    assert loser.asset.id == winner.asset.id


def test_place_without_provider_id_is_stored_under_requested_id(settings) -> None:
    places = FakePlacesClient(
        places={
            "id-a": legacy_place(place_id=None, name="Place A"),
            "id-b": legacy_place(place_id=None, name="Place B"),
        }
    )

    async def scenario(services):
        first = await services.registration.register("id-a")
        stored = await services.assets.find_by_external_id("id-a")
        second = await services.registration.register("id-b")
        return first, stored, second

    first, stored, second = _run(settings, places, FakeGenerator(), scenario)

    assert first.created is True
    assert first.asset.external_id == "id-a"
    assert stored.id == first.asset.id
    assert second.created is True
    assert second.asset.external_id == "id-b"
    assert second.asset.display_name.text == "Place B"
