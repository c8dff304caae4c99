"""
Branch level collaborators: lookups, hiding files and analysis control.

Analysis itself runs in an external engine. It is driven through a Temporal
workflow per (repository, branch); this service only starts and cancels it.
"""

from typing import Optional

from sqlalchemy.orm import Session
from temporalio.exceptions import WorkflowAlreadyStartedError
from temporalio.service import RPCError, RPCStatusCode

from repopages.core.config import settings
from repopages.core.temporal_client import TemporalClient, temporal_client
from repopages.models.db.branches import Branch
from repopages.models.db.code_files import CodeFile
from repopages.models.db.repositories import Repository
from repopages.services.branches.branch_directory import BranchDirectory
from repopages.services.storage import EntityStorage
from repopages.utils.logging import get_logger
from repopages.utils.retry import retry_with_backoff

logger = get_logger(__name__)


def create_analysis_workflow_id(repository: Repository, branch: Branch) -> str:
    return f"branch-analysis-{repository.id}-{branch.name}"


class BranchService:
    def __init__(
        self,
        db: Session,
        temporal: TemporalClient = temporal_client,
    ):
        self.db = db
        self.temporal = temporal
        self.storage = EntityStorage(db)

    def get(self, repository: Repository, branch_name: Optional[str]) -> Optional[Branch]:
        return BranchDirectory(repository).resolve(branch_name)

    def get_code_file(self, branch: Branch, path: str) -> Optional[CodeFile]:
        return (
            self.db.query(CodeFile)
            .filter(CodeFile.branch_id == branch.id, CodeFile.path == path)
            .first()
        )

    def hide_code_file(self, code_file: CodeFile) -> None:
        code_file.is_hidden = True
        self.storage.set(code_file)
        logger.info(f"Code file {code_file.path} hidden")

    async def start_analysis(self, repository: Repository, branch: Branch) -> None:
        """
        Start the analysis workflow, then record the branch as analyzing.

        Only the branch row is written. When the engine call fails the flag is
        left untouched so a later default switch starts the branch again.
        """
        workflow_id = create_analysis_workflow_id(repository, branch)
        client = await self.temporal.get_client()
        try:
            await retry_with_backoff(
                client.start_workflow,
                settings.ANALYSIS_WORKFLOW_NAME,
                {
                    "repository_id": str(repository.id),
                    "repository_external_id": repository.external_id,
                    "branch_name": branch.name,
                    "exclude_patterns": list(repository.exclude_patterns or []),
                },
                id=workflow_id,
                task_queue=settings.ANALYSIS_TASK_QUEUE,
            )
            logger.info(f"Analysis workflow {workflow_id} started")
        except WorkflowAlreadyStartedError:
            logger.info(f"Analysis workflow {workflow_id} is already running")
        except Exception as e:
            logger.error(f"Failed to start analysis workflow {workflow_id}: {e}")
            raise

        branch.is_analyzed = True
        self.storage.set(branch)

    async def stop_analysis(self, repository: Repository, branch: Branch) -> None:
        workflow_id = create_analysis_workflow_id(repository, branch)
        client = await self.temporal.get_client()
        handle = client.get_workflow_handle(workflow_id)
        try:
            await retry_with_backoff(handle.cancel)
            logger.info(f"Analysis workflow {workflow_id} cancellation requested")
        except RPCError as e:
            if e.status != RPCStatusCode.NOT_FOUND:
                logger.error(f"Failed to cancel analysis workflow {workflow_id}: {e}")
                raise
            logger.info(f"No running analysis workflow {workflow_id} to cancel")

        branch.is_analyzed = False
        self.storage.set(branch)
