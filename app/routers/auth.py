"""Authentication routes: local accounts with bearer tokens."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import ServiceContainer, get_current_user, get_services, to_http_exception
from app.models.auth import AuthResponse, LoginRequest, RegisterRequest, Role, User
from app.models.errors import DuplicateEmailError
from app.services.repositories import UserRepository
from app.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _issue_token(user: User, services: ServiceContainer) -> str:
    settings = services.settings
    return create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.jwt_expiration_minutes,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    services: ServiceContainer = Depends(get_services),
):
    """Create an account and return it together with an access token."""
    email = payload.email.lower()
    role = Role.ADMIN if email in services.settings.admin_email_set() else Role.USER

    try:
        record = await services.users.create_user(
            email=email,
            password_hash=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            role=role.value,
        )
    except DuplicateEmailError as exc:
        logger.warning(f"Registration rejected, email already registered: {email}")
        raise to_http_exception(exc)

    user = UserRepository.to_user(record)
    return AuthResponse(user=user, token=_issue_token(user, services))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    services: ServiceContainer = Depends(get_services),
):
    """Exchange email and password for an access token."""
    record = await services.users.find_by_email(payload.email)
    if record is None or not verify_password(payload.password, record.password_hash):
        logger.warning(f"Failed login attempt for {payload.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = UserRepository.to_user(record)
    logger.info(f"User logged in: {user.id}")
    return AuthResponse(user=user, token=_issue_token(user, services))


@router.get("/me", response_model=User)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get the authenticated user."""
    return current_user
