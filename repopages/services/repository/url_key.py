"""
Routing identifiers for repository pages.

A RepositoryUrlKey names a repository inside an owner's account and optionally
a branch. Pages without a branch segment resolve to the default branch.
"""

from dataclasses import dataclass, replace
from typing import Optional
from urllib.parse import quote, urlencode

from repopages.core.config import settings


@dataclass
class RepositoryUrlKey:
    owner: str
    name: str
    branch_name: Optional[str] = None

    def with_name(self, name: str) -> "RepositoryUrlKey":
        """Candidate key for a renamed repository; branch segment dropped."""
        return replace(self, name=name, branch_name=None)


class RepositoryUrlHelper:
    """Builds page URLs from a url key. Passed explicitly, never read from request state."""

    def __init__(self, prefix: Optional[str] = None, dashboard_path: Optional[str] = None):
        self.prefix = (prefix if prefix is not None else settings.ROUTE_PREFIX).rstrip("/")
        self.dashboard_path = dashboard_path if dashboard_path is not None else settings.DASHBOARD_PATH

    def page(self, url_key: RepositoryUrlKey, page: str = "", **params: str) -> str:
        path = f"{self.prefix}/{quote(url_key.owner, safe='')}/{quote(url_key.name, safe='')}"
        if page:
            path = f"{path}/{page}"
        query = {}
        if url_key.branch_name:
            query["branch"] = url_key.branch_name
        query.update({key: value for key, value in params.items() if value is not None})
        if query:
            path = f"{path}?{urlencode(query)}"
        return path

    def overview(self, url_key: RepositoryUrlKey) -> str:
        return self.page(url_key)

    def settings(self, url_key: RepositoryUrlKey) -> str:
        return self.page(url_key, "settings")

    def ignore(self, url_key: RepositoryUrlKey) -> str:
        return self.page(url_key, "ignore")

    def branches(self, url_key: RepositoryUrlKey) -> str:
        return self.page(url_key, "branches")

    def files(self, url_key: RepositoryUrlKey) -> str:
        return self.page(url_key, "files")

    def code_file(self, url_key: RepositoryUrlKey, path: str) -> str:
        return self.page(url_key, "file", path=path)

    def toggle_analysis(self, url_key: RepositoryUrlKey) -> str:
        return self.page(url_key, "branches/analysis")

    def dashboard(self) -> str:
        return self.dashboard_path
