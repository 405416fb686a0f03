"""
Unit tests for StudentService and the student use cases
"""
from unittest.mock import patch

import pytest
from bson import ObjectId

from app.core.errors import DatabaseError, NotFoundError, ValidationError
from conftest import JPEG_BYTES, data_uri, fake, student_input


def stored_files(upload_dir):
    return sorted(path.name for path in upload_dir.iterdir()) if upload_dir.exists() else []


class TestCreateStudent:
    """Test student creation"""

    def test_create_echoes_input(self, student_service):
        data = student_input(email='Someone@Example.com')

        student = student_service.create_student(data)

        assert student.id
        assert student.name == data['name']
        assert student.email == 'someone@example.com'
        assert student.age == data['age']
        assert student.photo is None
        assert student.created_at == student.updated_at
        assert student_service.get_student(student.id).email == 'someone@example.com'

    @pytest.mark.parametrize('age', [0, 121])
    def test_out_of_range_age_persists_nothing(self, student_service, upload_dir, age):
        with pytest.raises(ValidationError) as exc_info:
            student_service.create_student(student_input(age=age, photo=data_uri()))

        assert 'age' in exc_info.value.fields
        assert student_service.count_students() == 0
        assert stored_files(upload_dir) == []

    def test_create_with_photo_names_file_after_student(self, student_service, upload_dir):
        student = student_service.create_student(student_input(name='Jane Doe', photo=data_uri()))

        assert student.photo.startswith(f'/uploads/students/{student.id}_')
        assert student.photo.endswith('_jane_doe.png')
        assert stored_files(upload_dir) == [student.photo.rsplit('/', 1)[1]]

    def test_create_keeps_existing_locator(self, student_service, upload_dir):
        student = student_service.create_student(student_input(photo='https://cdn.example.com/me.png'))

        assert student.photo == 'https://cdn.example.com/me.png'
        assert stored_files(upload_dir) == []

    def test_create_with_invalid_photo_persists_nothing(self, student_service):
        with pytest.raises(ValidationError) as exc_info:
            student_service.create_student(student_input(photo=data_uri(b'GIF89a', 'image/gif')))

        assert 'photo' in exc_info.value.fields
        assert student_service.count_students() == 0

    def test_failed_insert_removes_new_photo(self, student_service, student_repository, upload_dir):
        with patch.object(student_repository, 'create', side_effect=DatabaseError('Failed to create student')):
            with pytest.raises(DatabaseError):
                student_service.create_student(student_input(photo=data_uri()))

        assert stored_files(upload_dir) == []


class TestGetAndListStudents:
    """Test reads"""

    def test_get_missing_student(self, student_service):
        with pytest.raises(NotFoundError) as exc_info:
            student_service.get_student(str(ObjectId()))
        assert exc_info.value.code == 'NOT_FOUND'

    def test_get_malformed_id_is_not_found(self, student_service):
        with pytest.raises(NotFoundError):
            student_service.get_student('12345')

    def test_get_blank_id_is_invalid(self, student_service):
        with pytest.raises(ValidationError):
            student_service.get_student('  ')

    def test_list_defaults_to_name_order(self, student_service):
        for name in ('Charlie Brown', 'Alice Liddell', 'Bob Marley'):
            student_service.create_student(student_input(name=name))

        names = [s.name for s in student_service.list_students()]

        assert names == ['Alice Liddell', 'Bob Marley', 'Charlie Brown']

    def test_list_rejects_invalid_criteria(self, student_service):
        with pytest.raises(ValidationError) as exc_info:
            student_service.list_students({'limit': 500})
        assert 'limit' in exc_info.value.fields


class TestUpdateStudent:
    """Test partial updates and photo replacement"""

    def test_update_changes_only_given_fields(self, student_service):
        student = student_service.create_student(student_input(age=20))

        updated = student_service.update_student(student.id, {'age': 21})

        assert updated.age == 21
        assert updated.name == student.name
        assert updated.email == student.email

    def test_update_validates_fields(self, student_service):
        student = student_service.create_student(student_input())

        with pytest.raises(ValidationError) as exc_info:
            student_service.update_student(student.id, {'age': 121})

        assert exc_info.value.fields == {'age': 'Age must be at most 120'}
        assert student_service.get_student(student.id).age == student.age

    def test_update_missing_student(self, student_service):
        with pytest.raises(NotFoundError):
            student_service.update_student(str(ObjectId()), {'age': 30})

    def test_replacing_photo_deletes_old_file(self, student_service, upload_dir):
        student = student_service.create_student(student_input(photo=data_uri()))
        old_file = student.photo.rsplit('/', 1)[1]

        updated = student_service.update_student(student.id, {'photo': data_uri(JPEG_BYTES, 'image/jpeg')})

        assert updated.photo != student.photo
        assert updated.photo.endswith('.jpg')
        assert stored_files(upload_dir) == [updated.photo.rsplit('/', 1)[1]]
        assert old_file not in stored_files(upload_dir)

    def test_new_photo_uses_new_name(self, student_service):
        student = student_service.create_student(student_input(name='Old Name'))

        updated = student_service.update_student(student.id, {'name': 'New Name', 'photo': data_uri()})

        assert updated.photo.endswith('_new_name.png')

    @pytest.mark.parametrize('cleared', ['', None])
    def test_clearing_photo_deletes_file(self, student_service, upload_dir, cleared):
        student = student_service.create_student(student_input(photo=data_uri()))

        updated = student_service.update_student(student.id, {'photo': cleared})

        assert updated.photo is None
        assert stored_files(upload_dir) == []

    def test_update_without_photo_keeps_it(self, student_service, upload_dir):
        student = student_service.create_student(student_input(photo=data_uri()))

        updated = student_service.update_student(student.id, {'address': fake.street_address() + ' Avenue'})

        assert updated.photo == student.photo
        assert len(stored_files(upload_dir)) == 1


class TestDeleteStudents:
    """Test single and bulk deletion"""

    def test_delete_removes_record_and_photo(self, student_service, upload_dir):
        student = student_service.create_student(student_input(photo=data_uri()))

        message = student_service.delete_student(student.id)

        assert message == 'Student deleted successfully'
        assert student_service.count_students() == 0
        assert stored_files(upload_dir) == []

    def test_delete_missing_student(self, student_service):
        with pytest.raises(NotFoundError):
            student_service.delete_student(str(ObjectId()))

    def test_bulk_delete_counts_only_existing(self, student_service, upload_dir):
        first = student_service.create_student(student_input(photo=data_uri()))
        second = student_service.create_student(student_input())
        third = student_service.create_student(student_input())

        deleted = student_service.delete_students([first.id, second.id, first.id, str(ObjectId()), 'garbage'])

        assert deleted == 2
        assert [s.id for s in student_service.list_students()] == [third.id]
        assert stored_files(upload_dir) == []

    def test_bulk_delete_requires_ids(self, student_service):
        with pytest.raises(ValidationError) as exc_info:
            student_service.delete_students([])
        assert 'ids' in exc_info.value.fields
