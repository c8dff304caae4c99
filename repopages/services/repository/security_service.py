from enum import Enum
from typing import Dict, FrozenSet

from repopages.models.schemas.repository_pages import PageLink


class RepositoryRole(str, Enum):
    OWNER = "owner"
    VIEWER = "viewer"


class RepositoryAction(str, Enum):
    VIEW = "view"
    RENAME = "rename"
    DELETE = "delete"
    SET_DEFAULT_BRANCH = "set_default_branch"
    TOGGLE_ANALYSIS = "toggle_analysis"
    EDIT_EXCLUDE_PATTERNS = "edit_exclude_patterns"
    IGNORE_FILE = "ignore_file"


PERMISSIONS: Dict[RepositoryRole, FrozenSet[RepositoryAction]] = {
    RepositoryRole.OWNER: frozenset(RepositoryAction),
    RepositoryRole.VIEWER: frozenset({RepositoryAction.VIEW}),
}


class RepositorySecurityService:
    """Answers which repository page actions a role may perform."""

    def is_allowed(self, action: RepositoryAction, role: RepositoryRole) -> bool:
        return action in PERMISSIONS.get(role, frozenset())

    def get_page_link(self, action: RepositoryAction, role: RepositoryRole, url: str) -> PageLink:
        return PageLink(url=url, allowed=self.is_allowed(action, role))
