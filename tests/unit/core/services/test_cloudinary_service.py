"""Unit tests for the Cloudinary media client."""

import pytest

from src.storefront.core.services import (
    CloudinaryService,
    ImageFile,
    MediaUploadError,
    UploadedImage,
)
from src.storefront.runtime.config.config_data import MediaConfig
from tests.fixtures.services import FakeUploader


def _image(name: str = "photo.png") -> ImageFile:
    return ImageFile(filename=name, content=b"\x89PNG fake", content_type="image/png")


class TestCloudinaryService:
    async def test_upload_passes_credentials_and_folder(
        self, media_service, cloudinary_api, config
    ):
        uploaded = await media_service.upload(_image())

        assert uploaded == UploadedImage(
            public_id="ecommerce/image-1",
            secure_url="https://res.cloudinary.com/demo-cloud/ecommerce/image-1.png",
        )
        call = cloudinary_api.upload_calls[0]
        assert call["cloud_name"] == config.media.cloud_name
        assert call["api_key"] == config.media.api_key
        assert call["api_secret"] == config.media.api_secret
        assert call["folder"] == "ecommerce"
        assert call["file"].name == "photo.png"
        assert call["file"].read() == b"\x89PNG fake"

    async def test_upload_prefix_is_forwarded(self, cloudinary_api):
        config = MediaConfig(
            cloud_name="c", api_key="k", api_secret="s", upload_prefix="http://media.test"
        )
        service = CloudinaryService(config, uploader=cloudinary_api)

        await service.upload(_image(), folder="banners")

        call = cloudinary_api.upload_calls[0]
        assert call["upload_prefix"] == "http://media.test"
        assert call["folder"] == "banners"

    async def test_sdk_error_becomes_upload_error(self, media_service, cloudinary_api):
        cloudinary_api.fail_uploads = {1}

        with pytest.raises(MediaUploadError, match="photo.png"):
            await media_service.upload(_image())

    async def test_upload_many_returns_every_image(self, media_service):
        uploaded = await media_service.upload_many([_image("a.png"), _image("b.png")])
        assert len(uploaded) == 2
        assert len({image.public_id for image in uploaded}) == 2

    async def test_upload_many_with_no_images(self, media_service, cloudinary_api):
        assert await media_service.upload_many([]) == []
        assert cloudinary_api.upload_calls == []

    async def test_failed_upload_removes_the_others(self, media_service, cloudinary_api):
        cloudinary_api.fail_uploads = {2}

        with pytest.raises(MediaUploadError):
            await media_service.upload_many(
                [_image("a.png"), _image("b.png"), _image("c.png")]
            )

        assert len(cloudinary_api.uploaded) == 2
        assert sorted(cloudinary_api.destroyed) == sorted(cloudinary_api.uploaded)

    async def test_destroy(self, media_service, cloudinary_api, config):
        assert await media_service.destroy("ecommerce/old") is True

        call = cloudinary_api.destroy_calls[0]
        assert call["public_id"] == "ecommerce/old"
        assert call["api_secret"] == config.media.api_secret
        assert cloudinary_api.destroyed == ["ecommerce/old"]

    async def test_destroy_failure_returns_false(self, media_service, cloudinary_api):
        cloudinary_api.fail_destroy = True
        assert await media_service.destroy("ecommerce/old") is False

    async def test_unconfigured_service_refuses_upload(self):
        uploader = FakeUploader("unused")
        service = CloudinaryService(MediaConfig(), uploader=uploader)

        with pytest.raises(MediaUploadError, match="not configured"):
            await service.upload(_image())
        assert uploader.upload_calls == []
