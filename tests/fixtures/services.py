"""Service fixtures for testing."""

import threading
from collections.abc import Generator
from typing import Any

import pytest
from cloudinary.exceptions import Error as CloudinaryError
from fastapi.testclient import TestClient

from src.storefront.api.http.app import app
from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.services import (
    AccessTokenService,
    CloudinaryService,
    DbSessionService,
)
from src.storefront.runtime.config.config_data import ConfigData


class FakeUploader:
    """In-memory stand-in for ``cloudinary.uploader``.

    Calls arrive from threadpool workers, so bookkeeping is locked.
    """

    def __init__(self, cloud_name: str) -> None:
        self.cloud_name = cloud_name
        self.uploaded: list[str] = []
        self.destroyed: list[str] = []
        self.upload_calls: list[dict[str, Any]] = []
        self.destroy_calls: list[dict[str, Any]] = []
        self.fail_uploads: set[int] = set()
        self.fail_destroy = False
        self._lock = threading.Lock()

    def upload(self, file, **options) -> dict[str, Any]:
        with self._lock:
            self.upload_calls.append({"file": file, **options})
            number = len(self.upload_calls)
            if number in self.fail_uploads:
                raise CloudinaryError("Upload rejected")
            public_id = f"{options.get('folder', 'ecommerce')}/image-{number}"
            self.uploaded.append(public_id)
        return {
            "public_id": public_id,
            "secure_url": f"https://res.cloudinary.com/{self.cloud_name}/{public_id}.png",
        }

    def destroy(self, public_id: str, **options) -> dict[str, Any]:
        with self._lock:
            self.destroy_calls.append({"public_id": public_id, **options})
            if self.fail_destroy:
                raise CloudinaryError("Destroy rejected")
            self.destroyed.append(public_id)
        return {"result": "ok"}


@pytest.fixture
def cloudinary_api(config: ConfigData) -> FakeUploader:
    return FakeUploader(config.media.cloud_name)


@pytest.fixture
def media_service(config: ConfigData, cloudinary_api: FakeUploader) -> CloudinaryService:
    return CloudinaryService(config.media, uploader=cloudinary_api)


@pytest.fixture
def app_dependencies(
    db_service: DbSessionService,
    media_service: CloudinaryService,
    token_service: AccessTokenService,
) -> Generator[ApplicationDependencies]:
    previous = getattr(app.state, "app_dependencies", None)
    app.state.app_dependencies = ApplicationDependencies(
        database_service=db_service,
        media_service=media_service,
        access_token_service=token_service,
    )
    yield app.state.app_dependencies
    app.state.app_dependencies = previous


@pytest.fixture
def client(app_dependencies: ApplicationDependencies) -> TestClient:
    """Test client wired to in-memory services; the lifespan is not run."""
    return TestClient(app)
