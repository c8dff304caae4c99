"""Tests for renaming a repository within its owner's account."""

from unittest.mock import MagicMock

import pytest

from repopages.services.repository.outcomes import NAME_ALREADY_EXISTS, Conflict, Renamed
from repopages.services.repository.page_service import RepositoryPageService
from repopages.services.repository.rename_coordinator import RenameCoordinator
from repopages.services.repository.url_key import RepositoryUrlKey


@pytest.fixture
def repository_service():
    return MagicMock()


@pytest.fixture
def storage():
    return MagicMock()


@pytest.fixture
def coordinator(repository_service, storage):
    return RenameCoordinator(RepositoryPageService(MagicMock()), repository_service, storage)


@pytest.mark.unit
def test_lookup_uses_normalized_name_in_owner_account(coordinator, repository_service, repository, url_key):
    repository_service.get_by_url_key.return_value = None

    coordinator.rename(repository, url_key, "New Name")

    looked_up = repository_service.get_by_url_key.call_args.args[0]
    assert looked_up == RepositoryUrlKey(owner="alice", name="new-name")


@pytest.mark.unit
def test_conflict_leaves_everything_untouched(coordinator, repository_service, storage, repository, url_key):
    repository_service.get_by_url_key.return_value = MagicMock(name="other-repository")

    outcome = coordinator.rename(repository, url_key, "Taken")

    assert outcome == Conflict(field="name", message=NAME_ALREADY_EXISTS)
    storage.set.assert_not_called()
    assert repository.name == "widgets"
    assert url_key == RepositoryUrlKey(owner="alice", name="widgets", branch_name="feature")


@pytest.mark.unit
def test_successful_rename_updates_names_and_persists(coordinator, repository_service, storage, repository, url_key):
    repository_service.get_by_url_key.return_value = None

    outcome = coordinator.rename(repository, url_key, "  Shiny Widgets! ")

    assert isinstance(outcome, Renamed)
    assert repository.name == "shiny-widgets"
    assert url_key.name == "shiny-widgets"
    assert url_key.branch_name is None
    assert outcome.url_key is url_key
    storage.set.assert_called_once_with(repository)


@pytest.mark.unit
def test_renaming_to_current_name_conflicts_with_itself(coordinator, repository_service, storage, repository, url_key):
    repository_service.get_by_url_key.return_value = repository

    outcome = coordinator.rename(repository, url_key, "Widgets")

    assert isinstance(outcome, Conflict)
    storage.set.assert_not_called()
