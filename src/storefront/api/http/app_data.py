from dataclasses import dataclass

from src.storefront.core.services import (
    AccessTokenService,
    CloudinaryService,
    DbSessionService,
)


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    media_service: CloudinaryService
    access_token_service: AccessTokenService
