import asyncio
import io
import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from PIL import Image

from imagehost.core.config import get_settings
from imagehost.services.storage import build_public_url

TEST_ENDPOINT = "http://minio.test:9000"
TEST_BUCKET = "test-bucket"

TEST_ENV = {
    "S3_ENDPOINT_URL": TEST_ENDPOINT,
    "S3_BUCKET": TEST_BUCKET,
    "S3_ACCESS_KEY": "test-access-key",
    "S3_SECRET_KEY": "test-secret-key",
    "S3_REGION": "us-east-1",
}


class FakeObjectStore:
    """In-memory ObjectStore recording every write."""

    def __init__(self, endpoint_url: str = TEST_ENDPOINT, bucket: str = TEST_BUCKET) -> None:
        self.endpoint_url = endpoint_url
        self.bucket = bucket
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.put_calls = 0
        self.fail_with: Exception | None = None

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        self.put_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        # Let concurrent uploads interleave.
        await asyncio.sleep(0)
        self.objects[key] = (data, content_type)

    def public_url(self, key: str) -> str:
        return build_public_url(self.endpoint_url, self.bucket, key)


@pytest.fixture(scope="session", autouse=True)
def configure_environment():
    os.environ.update(TEST_ENV)
    get_settings.cache_clear()


@pytest.fixture
def make_image():
    def _make(image_format: str = "PNG", color: tuple[int, int, int] = (255, 0, 0)) -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", (4, 4), color).save(buffer, format=image_format)
        return buffer.getvalue()

    return _make


@pytest.fixture
def store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def app_instance(configure_environment, store):
    from imagehost import main as app_module

    return app_module.create_app(store=store)


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
