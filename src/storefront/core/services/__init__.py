"""Core services exports."""

from .auth import AccessTokenService, AuthenticatedUser, InvalidTokenError
from .catalog import CatalogService
from .database import DbSessionService
from .media import CloudinaryService, ImageFile, MediaUploadError, UploadedImage

__all__ = [
    # Auth
    "AccessTokenService",
    "AuthenticatedUser",
    "InvalidTokenError",
    # Catalog
    "CatalogService",
    # Database
    "DbSessionService",
    # Media host
    "CloudinaryService",
    "ImageFile",
    "MediaUploadError",
    "UploadedImage",
]
