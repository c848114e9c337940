"""Dependencies for FastAPI routes."""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine

from app.config import Settings
from app.database import create_engine, create_session_factory, init_models
from app.models.auth import User
from app.models.errors import AppError, AuthenticationError, AuthorizationError
from app.services.asset_content import AssetContentService
from app.services.content_generation import ContentGenerator
from app.services.google_places import GooglePlacesClient
from app.services.registration import PlaceRegistrationService
from app.services.repositories import AssetRepository, UserRepository
from app.utils.security import decode_access_token

logger = logging.getLogger(__name__)

# HTTP Bearer token security; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


@dataclass
class ServiceContainer:
    """Long-lived clients and services shared by every request."""

    settings: Settings
    places_client: GooglePlacesClient
    generator: ContentGenerator
    users: UserRepository
    assets: AssetRepository
    content: AssetContentService
    registration: PlaceRegistrationService
    engine: Optional[AsyncEngine] = None

    async def close(self) -> None:
        await self.places_client.close()
        await self.generator.close()
        if self.engine is not None:
            await self.engine.dispose()


async def build_services(settings: Settings) -> ServiceContainer:
    """Create the clients, the database engine and the services built on them."""
    engine = create_engine(settings.database_url)
    if settings.database_auto_create:
        await init_models(engine)
    session_factory = create_session_factory(engine)

    places_client = GooglePlacesClient(
        api_key=settings.google_maps_api_key,
        api_version=settings.places_api_version,
        timeout=settings.google_places_timeout,
    )
    generator = ContentGenerator(
        api_key=settings.llm_api_key(),
        model=settings.llm_model,
        base_url=settings.resolved_llm_base_url(),
        timeout=settings.llm_timeout,
    )
    assets = AssetRepository(session_factory)
    content = AssetContentService(generator)

    logger.info(
        f"Services ready (places API: {settings.places_api_version}, "
        f"LLM provider: {settings.llm_provider}, model: {settings.llm_model})"
    )
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


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    services: ServiceContainer = Depends(get_services),
) -> User:
    """
    Verify the bearer token and return the current user.

    Raises:
        HTTPException: 401 if the token is missing, invalid or names an unknown user
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    settings = services.settings
    try:
        payload = decode_access_token(
            credentials.credentials,
            settings.jwt_secret,
            settings.jwt_algorithm,
        )
    except AuthenticationError as exc:
        logger.warning(f"Rejected bearer token: {exc.message}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    record = await services.users.get(payload["sub"])
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return UserRepository.to_user(record)


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        logger.warning(f"User {current_user.id} attempted an admin-only operation")
        raise to_http_exception(AuthorizationError("Admin privileges required"))
    return current_user


def to_http_exception(exc: AppError) -> HTTPException:
    """Translate a domain error into the HTTP error it maps to."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)
