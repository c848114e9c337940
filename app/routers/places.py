"""Places routes: provider search, registration and lookup of registered places."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import (
    ServiceContainer,
    get_current_user,
    get_services,
    require_admin,
    to_http_exception,
)
from app.models.assets import Asset, AssetData
from app.models.auth import User
from app.models.errors import (
    AppError,
    PlaceGeometryMissingError,
    PlaceNotFoundError,
    ValidationFailedError,
)
from app.models.places import DeletePlaceResponse, RegisterPlaceRequest
from app.utils.normalizers import map_provider_place

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/places", tags=["places"])
gplace_router = APIRouter(prefix="/gplace", tags=["places"])


@router.get("/search", response_model=List[AssetData], response_model_exclude_none=True)
async def search_places(
    query: Optional[str] = None,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius: int = Query(1000, ge=1, le=50000, description="Search radius in meters"),
    type: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
):
    """
    Search provider places by free text, or around a coordinate.

    Results are normalized but not persisted.
    """
    query = (query or "").strip()
    if not query and (lat is None or lng is None):
        raise ValidationFailedError(
            [{"field": "query", "message": "Either query or both lat and lng are required"}]
        )

    client = services.places_client
    try:
        if query:
            raw_places = await client.search_text(query)
        else:
            raw_places = await client.search_nearby(lat, lng, radius=radius, place_type=type)
    except AppError as exc:
        raise to_http_exception(exc)

    places: List[AssetData] = []
    for raw_place in raw_places:
        try:
            places.append(
                await map_provider_place(
                    raw_place,
                    client.api_version,
                    photo_url_builder=client.get_photo_url,
                )
            )
        except PlaceGeometryMissingError:
            logger.warning("Skipping search result without geometry")
    logger.info(f"Search returned {len(places)} places")
    return places


async def _register_place(
    payload: RegisterPlaceRequest,
    response: Response,
    current_user: User,
    services: ServiceContainer,
) -> Asset:
    logger.info(f"User {current_user.id} registering place {payload.place_id}")
    try:
        result = await services.registration.register(payload.place_id)
    except AppError as exc:
        logger.error(f"Failed to register place {payload.place_id}: {exc.message}")
        raise to_http_exception(exc)

    if not result.created:
        response.status_code = status.HTTP_200_OK
    return result.asset


@router.post(
    "/register",
    response_model=Asset,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def register_place(
    payload: RegisterPlaceRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
):
    """Register a provider place as an asset (201), or return the existing one (200)."""
    return await _register_place(payload, response, current_user, services)


@gplace_router.post(
    "/register",
    response_model=Asset,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def register_gplace(
    payload: RegisterPlaceRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
):
    """Alias of `POST /places/register`."""
    return await _register_place(payload, response, current_user, services)


@router.get("/{place_id}", response_model=Asset, response_model_exclude_none=True)
async def get_place(
    place_id: str,
    services: ServiceContainer = Depends(get_services),
):
    """Get a registered place by its provider place id."""
    asset = await services.assets.find_by_external_id(place_id)
    if asset is None:
        raise to_http_exception(PlaceNotFoundError(place_id))
    return asset


@router.delete("/{place_id}", response_model=DeletePlaceResponse)
async def delete_place(
    place_id: str,
    admin: User = Depends(require_admin),
    services: ServiceContainer = Depends(get_services),
):
    """Delete a registered place (admin only)."""
    deleted = await services.assets.delete(place_id)
    if not deleted:
        raise to_http_exception(PlaceNotFoundError(place_id))
    logger.info(f"Admin {admin.id} deleted place {place_id}")
    return DeletePlaceResponse(message="Place deleted successfully", place_id=place_id)
