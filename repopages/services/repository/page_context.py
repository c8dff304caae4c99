from dataclasses import dataclass, field
from typing import Optional

from repopages.models.db.branches import Branch
from repopages.models.db.repositories import Repository
from repopages.models.schemas.repository_pages import RepositoryHeaderViewModel
from repopages.services.repository.security_service import RepositoryRole
from repopages.services.repository.url_key import RepositoryUrlHelper, RepositoryUrlKey


@dataclass
class RepositoryPageContext:
    """Everything a repository page request has resolved before dispatch."""

    repository: Repository
    branch: Optional[Branch]
    url_key: RepositoryUrlKey
    header: Optional[RepositoryHeaderViewModel] = None
    role: RepositoryRole = RepositoryRole.VIEWER
    user_key: Optional[str] = None
    urls: RepositoryUrlHelper = field(default_factory=RepositoryUrlHelper)
