"""
Student Management API - Test Configuration and Fixtures
"""
import asyncio
import base64
import os
import tempfile
from typing import AsyncGenerator, Dict, Generator

import mongomock
import pytest
from faker import Faker
from httpx import ASGITransport, AsyncClient

# Set testing environment before the app reads its settings
os.environ['APP_ENV'] = 'test'
os.environ['MONGODB_URI'] = 'mongodb://localhost:27017'
os.environ['DB_NAME'] = 'student_management_test'
os.environ['PHOTO_STORAGE'] = 'local'
os.environ['UPLOAD_ROOT'] = tempfile.mkdtemp(prefix='student-api-')
os.environ['MONGO_RETRY_DELAY_SECONDS'] = '0'

from app.application.services.photo_service import PhotoService
from app.application.services.student_service import StudentService
from app.core.config import reset_settings
from app.di.container import DIContainer, get_container, reset_container
from app.domain.repositories.student_repository import StudentRepository
from app.domain.storage.photo_storage import PhotoStorage
from app.infrastructure.db.mongo_connection import MongoConnectionManager, set_mongo_connection

fake = Faker()

# Smallest payloads the photo checks accept; content is never decoded as an image
PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64
JPEG_BYTES = b'\xff\xd8\xff\xe0' + b'\x00' * 64


def run_sync(coroutine):
    """Run a coroutine on a private loop, leaving the test loop untouched"""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coroutine)
    finally:
        loop.close()


def data_uri(content: bytes = PNG_BYTES, mime: str = 'image/png') -> str:
    """Encode bytes as an inline image."""
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


def student_input(**overrides) -> Dict:
    """Valid create input with random values"""
    data = {
        'name': fake.name(),
        'email': fake.email(),
        'age': fake.random_int(min=1, max=120),
        'address': fake.street_address() + ', ' + fake.city(),
    }
    data.update(overrides)
    return data


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch) -> Generator:
    """Fresh settings, container and upload directory for each test"""
    monkeypatch.setenv('UPLOAD_ROOT', str(tmp_path / 'public'))
    reset_settings()
    reset_container()
    set_mongo_connection(None)
    yield
    reset_container()
    set_mongo_connection(None)
    reset_settings()


@pytest.fixture
def upload_dir(tmp_path):
    """Directory local photos are written to"""
    return tmp_path / 'public' / 'uploads' / 'students'


@pytest.fixture
def mongo_connection() -> Generator[MongoConnectionManager, None, None]:
    """Connection manager backed by an in-memory mongomock client"""
    connection = MongoConnectionManager(client_factory=mongomock.MongoClient, retry_delay_seconds=0)
    run_sync(connection.connect())
    set_mongo_connection(connection)
    yield connection
    run_sync(connection.close())


@pytest.fixture
def container(mongo_connection: MongoConnectionManager) -> DIContainer:
    """DI container wired to the in-memory database"""
    return get_container()


@pytest.fixture
def student_repository(container: DIContainer) -> StudentRepository:
    return container.get(StudentRepository)


@pytest.fixture
def photo_storage(container: DIContainer) -> PhotoStorage:
    return container.get(PhotoStorage)


@pytest.fixture
def photo_service(container: DIContainer) -> PhotoService:
    return container.get(PhotoService)


@pytest.fixture
def student_service(container: DIContainer) -> StudentService:
    return container.get(StudentService)


@pytest.fixture
async def client(container: DIContainer) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for a freshly built application"""
    from app.main import create_application

    application = create_application()
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


async def graphql(client: AsyncClient, query: str, variables: Dict = None) -> Dict:
    """POST a GraphQL operation and return the decoded body"""
    response = await client.post('/graphql', json={'query': query, 'variables': variables or {}})
    assert response.status_code == 200, response.text
    return response.json()
