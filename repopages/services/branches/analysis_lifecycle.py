"""
Analysis lifecycle of a branch.

A branch is either Inactive or Analyzing. Start moves Inactive to Analyzing,
Stop moves Analyzing to Inactive. Both commands are always forwarded to the
analysis control, even when the branch is already in the target state.
"""

from enum import Enum
from typing import Optional, Union

from repopages.models.db.branches import Branch
from repopages.models.db.repositories import Repository
from repopages.services.repository.outcomes import Acknowledged, NotFound, Outcome
from repopages.utils.exception import UnsupportedActionError
from repopages.utils.logging import get_logger

logger = get_logger(__name__)


class AnalysisState(str, Enum):
    INACTIVE = "inactive"
    ANALYZING = "analyzing"


class BranchAnalysisAction(str, Enum):
    START = "start"
    STOP = "stop"


def parse_action(action: Union[BranchAnalysisAction, str, None]) -> BranchAnalysisAction:
    try:
        return BranchAnalysisAction(action)
    except ValueError:
        raise UnsupportedActionError(action)


class AnalysisLifecycle:
    """
    Issues Start/Stop commands for a branch.

    Args:
        branch_service: collaborator providing `get`, `start_analysis` and
            `stop_analysis`
    """

    def __init__(self, branch_service):
        self.branch_service = branch_service

    @staticmethod
    def state_of(branch: Branch) -> AnalysisState:
        return AnalysisState.ANALYZING if branch.is_analyzed else AnalysisState.INACTIVE

    async def start(self, repository: Repository, branch: Branch) -> None:
        if self.state_of(branch) is AnalysisState.ANALYZING:
            logger.info(f"Branch {branch.name} of {repository.name} is already analyzing, re-issuing start")
        # The flag is recorded by the branch service once the engine accepted the command
        await self.branch_service.start_analysis(repository, branch)
        logger.info(f"Started analysis for branch {branch.name} of {repository.name}")

    async def stop(self, repository: Repository, branch: Branch) -> None:
        await self.branch_service.stop_analysis(repository, branch)
        logger.info(f"Stopped analysis for branch {branch.name} of {repository.name}")

    async def start_if_inactive(self, repository: Repository, branch: Branch) -> bool:
        """Start analysis for a new default branch unless it is already running."""
        if self.state_of(branch) is AnalysisState.ANALYZING:
            return False
        await self.start(repository, branch)
        return True

    async def toggle(
        self,
        repository: Repository,
        branch_name: Optional[str],
        action: Union[BranchAnalysisAction, str, None],
    ) -> Outcome:
        # An out-of-domain action aborts before any collaborator is touched
        action = parse_action(action)

        branch = self.branch_service.get(repository, branch_name)
        if branch is None:
            logger.warning(f"Cannot {action.value} analysis: branch {branch_name} not found in {repository.name}")
            return NotFound("branch")

        if action is BranchAnalysisAction.START:
            await self.start(repository, branch)
        else:
            await self.stop(repository, branch)
        return Acknowledged()
