"""Registration of provider places as persisted assets."""
import logging
from dataclasses import dataclass

from app.models.assets import Asset
from app.models.errors import DuplicateAssetError, PlaceNotFoundError
from app.services.asset_content import AssetContentService
from app.services.google_places import GooglePlacesClient
from app.services.repositories import AssetRepository
from app.utils.normalizers import map_provider_place

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    asset: Asset
    created: bool


class PlaceRegistrationService:
    """
    Turns a provider place id into an asset with AI content.

    Registration is idempotent on the external id: a place that is already
    stored is returned unchanged. AI generation failures never fail a
    registration; the asset keeps whatever content could be generated.
    """

    def __init__(
        self,
        places_client: GooglePlacesClient,
        assets: AssetRepository,
        content: AssetContentService,
    ) -> None:
        self.places_client = places_client
        self.assets = assets
        self.content = content

    async def register(self, place_id: str) -> RegistrationResult:
        """
        Raises:
            PlaceNotFoundError: If the provider does not know the place
            PlaceProviderError: If the provider fails or returns a place without geometry
        """
        existing = await self.assets.find_by_external_id(place_id)
        if existing:
            logger.info(f"Place {place_id} already registered")
            return RegistrationResult(asset=existing, created=False)

        raw_place = await self.places_client.get_place(place_id)
        if raw_place is None:
            raise PlaceNotFoundError(place_id)

        data = await map_provider_place(
            raw_place,
            self.places_client.api_version,
            photo_url_builder=self.places_client.get_photo_url,
            photo_resolver=self.places_client.resolve_photo_url,
        )
        if not data.external_id:
            # Stored under the id it was requested by, never under ""
            data = data.model_copy(update={"external_id": place_id})

        try:
            asset = await self.assets.create(data)
        except DuplicateAssetError:
            # Lost a race with a concurrent registration of the same place
            winner = await self.assets.find_by_external_id(data.external_id)
            if winner is None:
                raise
            return RegistrationResult(asset=winner, created=False)

        content = await self.content.generate_ai_content(asset)
        updated = await self.assets.update(asset.external_id, content.as_update())
        if content.failures:
            logger.warning(
                f"Registered {asset.external_id} with partial AI content: "
                f"{', '.join(sorted(content.failures))} failed"
            )
        else:
            logger.info(f"Registered {asset.external_id} with AI content")
        return RegistrationResult(asset=updated or asset, created=True)
