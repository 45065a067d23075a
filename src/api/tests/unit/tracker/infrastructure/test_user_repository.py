"""Unit tests for UserRepository."""

from unittest.mock import create_autospec

import pytest

from shared_kernel.entity_store import EntityStore
from tracker.domain.value_objects import UserId
from tracker.infrastructure.observability import UserRepositoryProbe
from tracker.infrastructure.user_repository import UserRepository
from tracker.ports.repositories import IUserRepository


@pytest.fixture
def mock_probe():
    """Create mock repository probe."""
    return create_autospec(UserRepositoryProbe, instance=True)


@pytest.fixture
def repository(clock, mock_probe):
    """Create UserRepository over an empty store."""
    store = EntityStore("user", UserId, clock=clock)
    return UserRepository(store=store, probe=mock_probe)


class TestProtocolCompliance:
    def test_implements_protocol(self, repository):
        assert isinstance(repository, IUserRepository)


class TestInsertAndUpdate:
    """Tests for insert and update."""

    def test_insert_assigns_identity(self, repository, make_user, mock_probe):
        stored = repository.insert(make_user("alice"))

        assert stored.id == UserId(1)
        assert stored.created_at is not None
        mock_probe.user_saved.assert_called_once_with(1, "alice")

    def test_update_replaces_and_refreshes_updated_at(
        self, repository, make_user, mock_probe
    ):
        stored = repository.insert(make_user("alice"))

        updated = repository.update(stored.with_profile(make_user("alicia")))

        assert updated.username == "alicia"
        assert updated.created_at == stored.created_at
        assert updated.updated_at > stored.updated_at
        mock_probe.user_updated.assert_called_once_with(1, "alicia")


class TestDelete:
    def test_delete_existing(self, repository, make_user, mock_probe):
        stored = repository.insert(make_user())

        assert repository.delete_by_id(stored.id) is True
        assert repository.find_by_id(stored.id) is None
        mock_probe.user_deleted.assert_called_once_with(1)

    def test_delete_missing(self, repository):
        assert repository.delete_by_id(UserId(9)) is False


class TestLookups:
    """Tests for lookups by id, username, email and first name."""

    def test_find_by_id(self, repository, make_user, mock_probe):
        stored = repository.insert(make_user())

        assert repository.find_by_id(stored.id) == stored
        mock_probe.user_retrieved.assert_called_with(1)

    def test_find_by_id_missing(self, repository, mock_probe):
        assert repository.find_by_id(UserId(5)) is None
        mock_probe.user_not_found.assert_called_once_with(5)

    def test_find_by_username_is_case_sensitive(self, repository, make_user):
        repository.insert(make_user("alice"))

        assert repository.find_by_username("alice") is not None
        assert repository.find_by_username("Alice") is None

    def test_find_by_email_is_case_insensitive(self, repository, make_user):
        stored = repository.insert(make_user("alice", email="Alice@Example.com"))

        assert repository.find_by_email("alice@example.COM") == stored

    def test_missing_email_reports_probe(self, repository, mock_probe):
        assert repository.find_by_email("nobody@example.com") is None
        mock_probe.email_not_found.assert_called_once_with("nobody@example.com")

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_blank_lookups_match_nothing(self, repository, make_user, blank):
        repository.insert(make_user())

        assert repository.find_by_username(blank) is None
        assert repository.find_by_email(blank) is None
        assert repository.find_by_first_name_containing(blank) == []
        assert repository.exists_by_username(blank) is False
        assert repository.exists_by_email(blank) is False

    def test_find_by_first_name_containing(self, repository, make_user):
        repository.insert(make_user("alice", first_name="Alice"))
        repository.insert(make_user("malik", first_name="Malika"))
        repository.insert(make_user("bob", first_name="Bob"))

        found = repository.find_by_first_name_containing("ALI")

        assert [user.username for user in found] == ["alice", "malik"]

    def test_exists_checks(self, repository, make_user):
        stored = repository.insert(make_user("alice"))

        assert repository.exists_by_id(stored.id)
        assert not repository.exists_by_id(UserId(2))
        assert repository.exists_by_username("alice")
        assert repository.exists_by_email("ALICE@example.com")


class TestCollection:
    def test_find_all_and_count(self, repository, make_user):
        for name in ("carol", "alice", "bob"):
            repository.insert(make_user(name))

        assert [user.id.value for user in repository.find_all()] == [1, 2, 3]
        assert repository.count() == 3
