"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Query, Request
from sqlmodel import Session

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.services import (
    AccessTokenService,
    AuthenticatedUser,
    CatalogService,
    CloudinaryService,
    InvalidTokenError,
)
from src.storefront.entities.product import ProductListQuery, split_csv
from src.storefront.entities.product.filters import SortField, SortOrder
from src.storefront.runtime.context import get_config


def _app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session that is closed once the response is sent."""
    session = _app_dependencies(request).database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_media_service(request: Request) -> CloudinaryService:
    """Get the media host client."""
    return _app_dependencies(request).media_service


def get_access_token_service(request: Request) -> AccessTokenService:
    """Get the access token verification service."""
    return _app_dependencies(request).access_token_service


def get_catalog_service(
    session: Session = Depends(get_db_session),
    media: CloudinaryService = Depends(get_media_service),
) -> CatalogService:
    return CatalogService(session, media)


def _extract_token(request: Request) -> str | None:
    token = request.cookies.get(get_config().auth.cookie_name)
    if token:
        return token
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return None


async def get_current_user(
    request: Request,
    tokens: AccessTokenService = Depends(get_access_token_service),
) -> AuthenticatedUser:
    """Authenticate the request from the access token cookie or a Bearer header."""
    token = _extract_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Unauthenticated user")

    try:
        user = tokens.verify(token)
    except InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid access token") from None

    request.state.user = user
    return user


def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Require the configured admin role."""
    if user.role != get_config().auth.admin_role:
        raise HTTPException(status_code=403, detail="Access denied! Super admin only")
    return user


def get_product_list_query(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    categories: str | None = Query(None, description="Comma-separated categories"),
    brands: str | None = Query(None, description="Comma-separated brands"),
    sizes: str | None = Query(None, description="Comma-separated sizes"),
    colors: str | None = Query(None, description="Comma-separated colors"),
    min_price: float = Query(0, ge=0, alias="minPrice"),
    max_price: float | None = Query(None, ge=0, alias="maxPrice"),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
) -> ProductListQuery:
    """Parse storefront listing parameters from the query string."""
    catalog_config = get_config().catalog
    page_size = limit or catalog_config.default_page_size
    if page_size > catalog_config.max_page_size:
        raise HTTPException(
            status_code=422,
            detail=f"limit must not exceed {catalog_config.max_page_size}",
        )

    return ProductListQuery(
        page=page,
        limit=page_size,
        categories=split_csv(categories),
        brands=split_csv(brands),
        sizes=split_csv(sizes),
        colors=split_csv(colors),
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
