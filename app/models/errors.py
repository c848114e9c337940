"""Domain errors raised by services and translated to HTTP responses by the routers."""
from typing import Dict, List, Optional


class AppError(Exception):
    """Base class for application errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationFailedError(AppError):
    """A request is missing or carries malformed required fields."""

    status_code = 400

    def __init__(self, errors: List[Dict[str, str]], message: str = "Validation failed"):
        self.errors = errors
        super().__init__(message)


class AuthenticationError(AppError):
    status_code = 401


class AuthorizationError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class PlaceNotFoundError(NotFoundError):
    def __init__(self, place_id: str):
        self.place_id = place_id
        super().__init__("Place not found")


class AssetNotFoundError(NotFoundError):
    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__("Asset not found")


class ConflictError(AppError):
    status_code = 409


class DuplicateEmailError(ConflictError):
    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class DuplicateAssetError(ConflictError):
    """Raised by the repository when an external id is inserted twice."""

    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__("Place already registered")


class PlaceProviderError(AppError):
    """The mapping provider failed or returned unusable data."""

    status_code = 500


class PlaceGeometryMissingError(PlaceProviderError):
    def __init__(self, place_id: Optional[str] = None):
        self.place_id = place_id
        super().__init__("Place geometry or location is missing")


class ContentGenerationError(AppError):
    """The generation provider failed; non-critical during registration."""

    status_code = 502


class UnsupportedRequestTypeError(AppError):
    def __init__(self, request_type: str):
        self.request_type = request_type
        super().__init__(f"Unsupported request type: {request_type}")
