"""
Unit tests for dependency wiring
"""
import pytest

from app.application.services.photo_service import PhotoService
from app.application.services.student_service import StudentService
from app.core.config import reset_settings
from app.di.base_container import BaseContainer
from app.di.container import DIContainer
from app.domain.repositories.student_repository import StudentRepository
from app.domain.storage.photo_storage import PhotoStorage
from app.infrastructure.db.mongo_student_repository import MongoStudentRepository
from app.infrastructure.storage.local_photo_storage import LocalPhotoStorage
from app.infrastructure.storage.s3_photo_storage import S3PhotoStorage


class TestBaseContainer:
    """Test registration and lookup"""

    def test_lazy_registration_is_built_once(self):
        container = BaseContainer()
        calls = []
        container.register_lazy('thing', lambda: calls.append(1) or object())

        assert 'thing' in container
        assert not calls

        first = container.get('thing')
        assert container.get('thing') is first
        assert calls == [1]

    def test_singleton_replaces_lazy(self):
        container = BaseContainer()
        container.register_lazy('thing', lambda: 'lazy')
        container.register_singleton('thing', 'ready')

        assert container.get('thing') == 'ready'

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            BaseContainer().get('missing')


class TestDIContainer:
    """Test the application wiring"""

    def test_wires_local_stack(self, mongo_connection):
        container = DIContainer()

        assert container.get('mongo_connection') is mongo_connection
        assert isinstance(container.get(StudentRepository), MongoStudentRepository)
        assert isinstance(container.get(PhotoStorage), LocalPhotoStorage)
        assert isinstance(container.get(PhotoService), PhotoService)
        assert container.get(StudentService) is container.get(StudentService)

    def test_selects_s3_storage(self, monkeypatch):
        monkeypatch.setenv('PHOTO_STORAGE', 's3')
        monkeypatch.setenv('S3_BUCKET_NAME', 'student-photos')
        monkeypatch.setenv('AWS_REGION', 'eu-west-1')
        reset_settings()

        storage = DIContainer().get(PhotoStorage)

        assert isinstance(storage, S3PhotoStorage)
        assert storage.owns('https://student-photos.s3.eu-west-1.amazonaws.com/uploads/students/a.png')

    def test_unknown_storage_backend(self, monkeypatch):
        monkeypatch.setenv('PHOTO_STORAGE', 'ftp')
        reset_settings()

        with pytest.raises(ValueError):
            DIContainer().get(PhotoStorage)
