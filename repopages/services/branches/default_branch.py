from repopages.models.db.repositories import Repository
from repopages.services.branches.analysis_lifecycle import AnalysisLifecycle
from repopages.services.branches.branch_directory import BranchDirectory
from repopages.services.repository.outcomes import NotFound, Outcome, Redirect, RedirectTarget
from repopages.services.repository.url_key import RepositoryUrlKey
from repopages.utils.logging import get_logger

logger = get_logger(__name__)


class DefaultBranchSwitcher:
    """
    Moves the default flag of a repository to another branch.

    Order: resolve new branch, resolve current default, flip flags, persist,
    then start analysis on the new default if it was not analyzing.
    """

    def __init__(self, branch_service, repository_service, storage, lifecycle: AnalysisLifecycle):
        self.branch_service = branch_service
        self.repository_service = repository_service
        self.storage = storage
        self.lifecycle = lifecycle

    async def switch(self, repository: Repository, url_key: RepositoryUrlKey, branch_name: str) -> Outcome:
        branch = self.branch_service.get(repository, branch_name)
        if branch is None:
            logger.warning(f"Cannot set default branch: {branch_name} not found in {repository.name}")
            return NotFound("branch")

        previous = self.repository_service.get_default_branch(repository)
        BranchDirectory(repository).set_default(branch, previous)

        self.storage.set(repository)
        logger.info(
            f"Default branch of {repository.name} changed from "
            f"{previous.name if previous is not None else None} to {branch.name}"
        )

        # Must run after the flag change is persisted
        await self.lifecycle.start_if_inactive(repository, branch)

        url_key.branch_name = None
        return Redirect(RedirectTarget.SETTINGS, url_key)
