"""
Page context resolution for repository routes.

Loads the repository and branch named by the URL, works out the viewer's
role and builds the page header before any page handler runs.
"""

from typing import Callable, Optional

from fastapi import Depends, Query

from repopages.api.fastapi.middlewares.auth import get_current_user
from repopages.models.db.users import User
from repopages.services.branches.branch_directory import BranchDirectory
from repopages.services.repository.page_context import RepositoryPageContext
from repopages.services.repository.page_service import RepositoryPageService
from repopages.services.repository.repository_service import RepositoryService
from repopages.services.repository.security_service import (
    RepositoryAction,
    RepositoryRole,
    RepositorySecurityService,
)
from repopages.services.repository.url_key import RepositoryUrlHelper, RepositoryUrlKey
from repopages.utils.exception import BranchNotFoundError, ForbiddenException, RepositoryNotFoundError
from repopages.utils.logging import get_logger

logger = get_logger(__name__)


def get_url_helper() -> RepositoryUrlHelper:
    return RepositoryUrlHelper()


def get_security_service() -> RepositorySecurityService:
    return RepositorySecurityService()


def get_page_context(
    owner: str,
    name: str,
    branch: Optional[str] = Query(None, description="Branch name; the default branch when omitted"),
    current_user: User = Depends(get_current_user),
    repository_service: RepositoryService = Depends(RepositoryService),
    page_service: RepositoryPageService = Depends(RepositoryPageService),
    urls: RepositoryUrlHelper = Depends(get_url_helper),
) -> RepositoryPageContext:
    url_key = RepositoryUrlKey(owner=owner, name=name, branch_name=branch)

    repository = repository_service.get_by_url_key(url_key)
    if repository is None:
        raise RepositoryNotFoundError(f"Repository {owner}/{name} not found")

    directory = BranchDirectory(repository)
    if branch:
        resolved_branch = directory.resolve(branch)
        if resolved_branch is None:
            raise BranchNotFoundError(f"Branch {branch} not found in {owner}/{name}")
    else:
        resolved_branch = directory.default_branch()

    user_key = current_user.user_key
    role = RepositoryRole.OWNER if user_key in repository.user_keys else RepositoryRole.VIEWER

    return RepositoryPageContext(
        repository=repository,
        branch=resolved_branch,
        url_key=url_key,
        header=page_service.get_header(repository, url_key, urls),
        role=role,
        user_key=user_key,
        urls=urls,
    )


def require_action(action: RepositoryAction) -> Callable[..., RepositoryPageContext]:
    """Route dependency: the resolved context, provided the viewer may perform `action`."""

    def dependency(
        context: RepositoryPageContext = Depends(get_page_context),
        security_service: RepositorySecurityService = Depends(get_security_service),
    ) -> RepositoryPageContext:
        if not security_service.is_allowed(action, context.role):
            logger.warning(
                f"User {context.user_key} with role {context.role.value} denied {action.value} "
                f"on {context.url_key.owner}/{context.url_key.name}"
            )
            raise ForbiddenException(f"You do not have permission to {action.value.replace('_', ' ')} this repository")
        return context

    return dependency
