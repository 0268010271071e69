"""Product catalog operations that span the database and the media host."""

from loguru import logger
from sqlmodel import Session
from starlette.concurrency import run_in_threadpool

from src.storefront.core.services.media.cloudinary_service import (
    CloudinaryService,
    ImageFile,
)
from src.storefront.entities.product import Product, ProductDraft, ProductRepository


class CatalogService:
    def __init__(self, session: Session, media: CloudinaryService) -> None:
        self._session = session
        self._media = media
        self._products = ProductRepository(session)

    def _insert(self, product: Product) -> Product:
        try:
            created = self._products.create(product)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return created

    async def create_product(
        self, draft: ProductDraft, images: list[ImageFile]
    ) -> Product:
        """Upload images, then persist the product with their URLs.

        Images uploaded for this product are removed from the media host
        again when the database write fails. The blocking session work runs
        in the threadpool.
        """
        uploaded = await self._media.upload_many(images)
        try:
            product = await run_in_threadpool(
                self._insert,
                draft.to_product(images=[image.secure_url for image in uploaded]),
            )
        except Exception:
            logger.error(
                "Product insert failed; removing {} uploaded images", len(uploaded)
            )
            await self._media.destroy_many(uploaded)
            raise

        logger.bind(product_id=product.id, image_count=len(uploaded)).info(
            "Product created"
        )
        return product
