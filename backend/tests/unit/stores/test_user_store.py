"""Unit tests for UserStore (executor-backed user persistence)."""

from __future__ import annotations

import pytest
from authgate.services._shared.errors import ConflictError, ResourceNotFoundError
from authgate.services.identity.dto import UserCreate, UserFilter, UserUpdateIn
from authgate.stores import UserStore

from tests.factories.user import UserFactory


@pytest.fixture()
def store(session):
    return UserStore()


def make_create(**overrides) -> UserCreate:
    data = {
        "username": "ada",
        "email": "ada@example.com",
        "password_hash": "$2b$04$notreallyahash",
        "first_name": "Ada",
        "last_name": "Lovelace",
    }
    data.update(overrides)
    return UserCreate(**data)


class TestUserStoreLookups:
    def test_find_by_username_returns_detached_record(self, store):
        u = UserFactory(username="grace")
        record = store.find_by_username("grace")

        assert record.id == u.id
        assert record.email == u.email
        assert record.active and not record.deleted

    def test_not_found_names_the_condition(self, store):
        with pytest.raises(ResourceNotFoundError) as info:
            store.find_by_username("nobody")

        assert info.value.resource == "User"
        assert str(info.value) == "User with condition username=nobody not found"

    def test_find_by_email_and_id(self, store):
        u = UserFactory(email="linus@example.com")
        assert store.find_by_email("linus@example.com").id == u.id
        assert store.find_by_id(u.id).email == "linus@example.com"

        with pytest.raises(ResourceNotFoundError, match="email=x@example.com"):
            store.find_by_email("x@example.com")

    def test_find_all_sees_deleted_rows_when_asked(self, store):
        live = UserFactory()
        gone = UserFactory()
        store.soft_delete(gone.id)

        deleted = store.find_all(UserFilter(deleted=True))
        assert [r.id for r in deleted] == [gone.id]
        assert live.id in {r.id for r in store.find_all()}


class TestUserStoreMutations:
    def test_create_persists_user(self, store):
        record = store.create(make_create())

        assert record.id
        assert store.find_by_username("ada").id == record.id

    def test_duplicate_username_is_a_conflict(self, store):
        store.create(make_create())

        with pytest.raises(ConflictError, match="username already taken"):
            store.create(make_create(email="other@example.com"))

    def test_duplicate_email_is_a_conflict(self, store):
        store.create(make_create())

        with pytest.raises(ConflictError, match="email already registered"):
            store.create(make_create(username="ada2", email="ADA@example.com"))

    def test_store_is_usable_after_a_conflict(self, store):
        store.create(make_create())
        with pytest.raises(ConflictError):
            store.create(make_create())

        assert store.find_by_username("ada").email == "ada@example.com"

    def test_update_applies_only_provided_fields(self, store):
        u = UserFactory(first_name="Old", last_name="Name")

        record = store.update(u.id, UserUpdateIn(first_name="New", last_name=""))

        assert record.first_name == "New"
        assert record.last_name == "Name"

    def test_update_unknown_user(self, store):
        with pytest.raises(ResourceNotFoundError, match="id=missing"):
            store.update("missing", UserUpdateIn(first_name="x"))

    def test_soft_delete_hides_user(self, store):
        u = UserFactory(username="bye")
        record = store.soft_delete(u.id)

        assert record.deleted and record.deleted_at is not None
        with pytest.raises(ResourceNotFoundError):
            store.find_by_username("bye")

    def test_delete_removes_row(self, store):
        u = UserFactory()
        store.delete(u.id)

        assert store.find_all(UserFilter(email=u.email)) == []
        with pytest.raises(ResourceNotFoundError):
            store.delete(u.id)
