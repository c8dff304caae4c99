import uuid

import pytest

from repopages.models.db import Repository, User
from repopages.models.schemas.repository_pages import RepositoryHeaderViewModel
from repopages.services.repository.page_context import RepositoryPageContext
from repopages.services.repository.security_service import RepositoryRole
from repopages.services.repository.url_key import RepositoryUrlHelper, RepositoryUrlKey
from tests.factories import make_branch


@pytest.fixture
def owner():
    return User(user_id=uuid.uuid4(), email="alice@example.com", username="alice")


@pytest.fixture
def repository(owner):
    repo = Repository(id=uuid.uuid4(), external_id="ext-1", name="widgets", exclude_patterns=[])
    repo.owners.append(owner)
    return repo


@pytest.fixture
def url_key():
    return RepositoryUrlKey(owner="alice", name="widgets", branch_name="feature")


@pytest.fixture
def urls():
    return RepositoryUrlHelper(prefix="/repositories", dashboard_path="/dashboard")


@pytest.fixture
def header(url_key, urls):
    return RepositoryHeaderViewModel(
        name="widgets",
        external_id="ext-1",
        branch_name=url_key.branch_name,
        overview_url=urls.overview(url_key),
        files_url=urls.files(url_key),
        branches_url=urls.branches(url_key),
        settings_url=urls.settings(url_key),
        ignore_link=urls.ignore(url_key),
    )


@pytest.fixture
def page_context(repository, url_key, header, urls, owner):
    branch = make_branch("main", is_default=True, is_analyzed=True)
    repository.branches.append(branch)
    return RepositoryPageContext(
        repository=repository,
        branch=branch,
        url_key=url_key,
        header=header,
        role=RepositoryRole.OWNER,
        user_key=owner.user_key,
        urls=urls,
    )
