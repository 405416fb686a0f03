"""
Unit tests for the MongoDB student repository (mongomock backed)
"""
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, OperationFailure

from app.core.errors import DatabaseConnectionError, DatabaseError, NotFoundError
from app.domain.models.student import Student
from app.infrastructure.db.mongo_student_repository import MongoStudentRepository


def make_student(repository, **fields) -> Student:
    data = {
        'name': 'Grace Hopper',
        'email': 'grace@navy.mil',
        'age': 40,
        'address': '1 Harbor Road',
    }
    data.update(fields)
    return repository.create(Student(id=repository.new_id(), **data))


class RacingCollection:
    """Collection whose first delete is preceded by another client deleting `victim_id`"""

    def __init__(self, collection, victim_id):
        self._collection = collection
        self._victim_id = victim_id

    def __getattr__(self, name):
        return getattr(self._collection, name)

    def find_one_and_delete(self, query, *args, **kwargs):
        if self._victim_id is not None:
            self._collection.delete_one({'_id': self._victim_id})
            self._victim_id = None
        return self._collection.find_one_and_delete(query, *args, **kwargs)


def search(repository, term=None, sort_by='name', descending=False, limit=50, offset=0):
    return repository.find_many(term, sort_by, descending, limit, offset)


class TestBuildSearchQuery:
    """Test free-text filter construction"""

    @pytest.mark.parametrize('term', [None, '', '   '])
    def test_blank_term_matches_everything(self, term):
        assert MongoStudentRepository.build_search_query(term) == {}

    def test_text_term_has_no_age_clause(self):
        query = MongoStudentRepository.build_search_query('ann')
        assert len(query['$or']) == 3
        assert {'name': {'$regex': 'ann', '$options': 'i'}} in query['$or']

    def test_numeric_term_adds_age_clause(self):
        query = MongoStudentRepository.build_search_query('21')
        assert {'age': 21} in query['$or']

    def test_regex_metacharacters_are_escaped(self):
        query = MongoStudentRepository.build_search_query('a.c')
        assert query['$or'][0]['name']['$regex'] == r'a\.c'

    def test_nan_is_not_numeric(self):
        query = MongoStudentRepository.build_search_query('nan')
        assert all('age' not in clause for clause in query['$or'])

    @pytest.mark.parametrize('term', ['1_0', 'infinity', 'inf', '1e400', '12abc', '0x1_0'])
    def test_non_literal_numbers_add_no_age_clause(self, term):
        query = MongoStudentRepository.build_search_query(term)
        assert all('age' not in clause for clause in query['$or'])

    @pytest.mark.parametrize('term, age', [
        ('+21', 21),
        ('21.0', 21),
        ('2.1e1', 21),
        ('0x15', 21),
        ('20.5', 20.5),
    ])
    def test_numeric_literals_add_age_clause(self, term, age):
        query = MongoStudentRepository.build_search_query(term)
        assert {'age': age} in query['$or']


class TestMongoStudentRepository:
    """Test CRUD against an in-memory database"""

    def test_create_and_find(self, student_repository):
        created = make_student(student_repository)

        found = student_repository.find_by_id(created.id)

        assert found is not None
        assert found.name == 'Grace Hopper'
        assert found.created_at is not None
        assert found.updated_at == found.created_at

    def test_find_by_malformed_id_returns_none(self, student_repository):
        assert student_repository.find_by_id('not-an-object-id') is None
        assert student_repository.find_by_id(str(ObjectId())) is None

    def test_search_is_case_insensitive_substring(self, student_repository):
        make_student(student_repository, name='Alice Smith', email='alice@example.com')
        make_student(student_repository, name='Bob Jones', email='bob@example.com')

        results = search(student_repository, 'ALICE')

        assert [s.name for s in results] == ['Alice Smith']

    def test_search_matches_address(self, student_repository):
        make_student(student_repository, name='Carol', address='221B Baker Street')
        make_student(student_repository, name='Dave', address='10 Downing Street')

        assert [s.name for s in search(student_repository, 'baker')] == ['Carol']

    def test_numeric_search_matches_age_and_text(self, student_repository):
        make_student(student_repository, name='Young One', email='y@example.com', age=21, address='Elm Road')
        make_student(student_repository, name='Street Dweller', email='s@example.com', age=50, address='21 Oak Lane')
        make_student(student_repository, name='Nobody', email='n@example.com', age=30, address='Pine Road')

        names = sorted(s.name for s in search(student_repository, '21'))

        assert names == ['Street Dweller', 'Young One']

    def test_search_does_not_interpret_regex(self, student_repository):
        make_student(student_repository, name='abc')
        make_student(student_repository, name='a.c')

        assert [s.name for s in search(student_repository, 'a.c')] == ['a.c']

    def test_sort_and_paginate(self, student_repository):
        for age in (30, 10, 20, 40):
            make_student(student_repository, name=f'Student {age}', age=age)

        ascending = search(student_repository, sort_by='age')
        descending_page = search(student_repository, sort_by='age', descending=True, limit=2, offset=1)

        assert [s.age for s in ascending] == [10, 20, 30, 40]
        assert [s.age for s in descending_page] == [30, 20]

    def test_update_applies_partial_changes(self, student_repository):
        created = make_student(student_repository)

        updated = student_repository.update(created.id, {'age': 41})

        assert updated.age == 41
        assert updated.name == created.name
        assert updated.updated_at >= updated.created_at

    def test_update_missing_raises_not_found(self, student_repository):
        with pytest.raises(NotFoundError):
            student_repository.update(str(ObjectId()), {'age': 41})
        with pytest.raises(NotFoundError):
            student_repository.update('garbage', {'age': 41})

    def test_delete_returns_removed_student(self, student_repository):
        created = make_student(student_repository)

        deleted = student_repository.delete(created.id)

        assert deleted.id == created.id
        assert student_repository.find_by_id(created.id) is None

    @pytest.mark.parametrize('student_id', [str(ObjectId()), 'garbage'])
    def test_delete_missing_raises_not_found(self, student_repository, student_id):
        with pytest.raises(NotFoundError) as exc_info:
            student_repository.delete(student_id)
        assert exc_info.value.status_code == 404

    def test_delete_many_ignores_unknown_ids(self, student_repository):
        first = make_student(student_repository, name='First')
        second = make_student(student_repository, name='Second')
        make_student(student_repository, name='Third')

        deleted = student_repository.delete_many([first.id, second.id, str(ObjectId()), 'garbage'])

        assert sorted(s.name for s in deleted) == ['First', 'Second']
        assert student_repository.count() == 1

    def test_delete_many_with_nothing_to_delete(self, student_repository):
        assert student_repository.delete_many(['garbage']) == []
        assert student_repository.delete_many([str(ObjectId())]) == []

    def test_delete_many_skips_records_removed_concurrently(self, student_repository, mongo_connection, monkeypatch):
        first = make_student(student_repository, name='First')
        second = make_student(student_repository, name='Second')
        collection = mongo_connection.get_collection('students')
        racing = RacingCollection(collection, ObjectId(second.id))
        monkeypatch.setattr(MongoStudentRepository, '_collection', property(lambda self: racing))

        removed = student_repository.delete_many([first.id, second.id])

        assert [s.name for s in removed] == ['First']
        assert collection.count_documents({}) == 0

    def test_delete_many_counts_duplicate_ids_once(self, student_repository):
        student = make_student(student_repository)

        removed = student_repository.delete_many([student.id, student.id])

        assert len(removed) == 1


class TestDriverErrors:
    """Test translation of pymongo failures"""

    @pytest.fixture
    def collection(self):
        return MagicMock()

    @pytest.fixture
    def repository(self, collection):
        connection = MagicMock()
        connection.get_collection.return_value = collection
        return MongoStudentRepository(connection=connection)

    def test_operation_failure_becomes_database_error(self, repository, collection):
        collection.count_documents.side_effect = OperationFailure('not authorized')

        with pytest.raises(DatabaseError) as exc_info:
            repository.count()

        assert exc_info.value.message == 'Failed to count students'
        assert isinstance(exc_info.value.original_error, OperationFailure)
        assert not isinstance(exc_info.value, DatabaseConnectionError)

    def test_connectivity_failure_becomes_connection_error(self, repository, collection):
        collection.find_one.side_effect = AutoReconnect('connection closed')

        with pytest.raises(DatabaseConnectionError) as exc_info:
            repository.find_by_id(str(ObjectId()))

        assert exc_info.value.status_code == 503
