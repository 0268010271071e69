"""Product API router with CRUD operations and storefront listing."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from loguru import logger
from pydantic import ValidationError
from sqlmodel import Session

from src.storefront.api.http.deps import (
    get_catalog_service,
    get_current_user,
    get_db_session,
    get_product_list_query,
    require_admin,
)
from src.storefront.api.http.schemas import MessageResponse
from src.storefront.core.services import CatalogService, ImageFile
from src.storefront.entities._base import ApiModel
from src.storefront.entities.product import (
    Product,
    ProductDraft,
    ProductListQuery,
    ProductRepository,
    ProductUpdate,
    split_csv,
)


router = APIRouter(prefix="/api/products", tags=["products"])


class ProductPage(ApiModel):
    success: bool = True
    products: list[Product]
    current_page: int
    total_page: int
    total_products: int


def _unprocessable(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422, detail=e.errors(include_url=False, include_context=False)
    )


@router.post(
    "",
    response_model=Product,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def create_product(
    name: str = Form(...),
    brand: str = Form(...),
    description: str = Form(""),
    category: str = Form(...),
    gender: str = Form(""),
    sizes: str = Form(""),
    colors: str = Form(""),
    price: float = Form(...),
    stock: int = Form(...),
    images: list[UploadFile] | None = File(None),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Product:
    """Create a product, uploading its images to the media host."""
    try:
        draft = ProductDraft(
            name=name,
            brand=brand,
            description=description,
            category=category,
            gender=gender,
            sizes=split_csv(sizes),
            colors=split_csv(colors),
            price=price,
            stock=stock,
        )
    except ValidationError as e:
        raise _unprocessable(e) from None

    files = [
        ImageFile(
            filename=upload.filename or "image",
            content=await upload.read(),
            content_type=upload.content_type or "application/octet-stream",
        )
        for upload in images or []
    ]
    return await catalog.create_product(draft, files)


@router.get(
    "/admin",
    response_model=list[Product],
    dependencies=[Depends(require_admin)],
)
def fetch_all_products_for_admin(
    session: Session = Depends(get_db_session),
) -> list[Product]:
    """List every product, unpaginated."""
    return ProductRepository(session).list_all()


@router.get(
    "",
    response_model=ProductPage,
    dependencies=[Depends(get_current_user)],
)
def get_products_for_client(
    query: ProductListQuery = Depends(get_product_list_query),
    session: Session = Depends(get_db_session),
) -> ProductPage:
    """Filtered, sorted and paginated product listing."""
    products, total = ProductRepository(session).list_filtered(query)
    logger.bind(total=total, page=query.page).debug("Product listing served")
    return ProductPage(
        products=products,
        current_page=query.page,
        total_page=query.total_pages(total),
        total_products=total,
    )


@router.get(
    "/{product_id}",
    response_model=Product,
    dependencies=[Depends(get_current_user)],
)
def get_product(
    product_id: str,
    session: Session = Depends(get_db_session),
) -> Product:
    """Get a product by ID."""
    product = ProductRepository(session).get(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found!")
    return product


@router.put(
    "/{product_id}",
    response_model=Product,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: str,
    name: str | None = Form(None),
    brand: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    gender: str | None = Form(None),
    sizes: str | None = Form(None),
    colors: str | None = Form(None),
    price: float | None = Form(None),
    stock: int | None = Form(None),
    rating: float | None = Form(None),
    session: Session = Depends(get_db_session),
) -> Product:
    """Update the supplied fields of a product."""
    try:
        update = ProductUpdate(
            name=name,
            brand=brand,
            description=description,
            category=category,
            gender=gender,
            sizes=split_csv(sizes) if sizes is not None else None,
            colors=split_csv(colors) if colors is not None else None,
            price=price,
            stock=stock,
            rating=rating,
        )
    except ValidationError as e:
        raise _unprocessable(e) from None

    repository = ProductRepository(session)
    try:
        updated_product = repository.update(product_id, update.changes())
    except ValueError:
        raise HTTPException(status_code=404, detail="Product not found!") from None
    session.commit()
    return updated_product


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: str,
    session: Session = Depends(get_db_session),
) -> MessageResponse:
    """Delete a product."""
    deleted = ProductRepository(session).delete(product_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found!")
    session.commit()
    return MessageResponse(message="Product deleted successfully!")
