"""Asset routes."""
import logging

from fastapi import APIRouter, Depends

from app.dependencies import ServiceContainer, get_current_user, get_services, to_http_exception
from app.models.assets import Asset, AssetUpdate
from app.models.auth import User
from app.models.errors import AssetNotFoundError, ContentGenerationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("/{external_id}", response_model=Asset, response_model_exclude_none=True)
async def get_asset(
    external_id: str,
    services: ServiceContainer = Depends(get_services),
):
    asset = await services.assets.find_by_external_id(external_id)
    if asset is None:
        raise to_http_exception(AssetNotFoundError(external_id))
    return asset


@router.post(
    "/{external_id}/landing-page",
    response_model=Asset,
    response_model_exclude_none=True,
)
async def generate_landing_page(
    external_id: str,
    current_user: User = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
):
    """Generate (or regenerate) the landing page of an asset and store it."""
    asset = await services.assets.find_by_external_id(external_id)
    if asset is None:
        raise to_http_exception(AssetNotFoundError(external_id))

    logger.info(f"User {current_user.id} requested a landing page for {external_id}")
    try:
        landing_page = await services.content.generate_landing_page(asset)
    except ContentGenerationError as exc:
        raise to_http_exception(exc)

    updated = await services.assets.update(external_id, AssetUpdate(ai_landing_page=landing_page))
    if updated is None:
        raise to_http_exception(AssetNotFoundError(external_id))
    return updated
