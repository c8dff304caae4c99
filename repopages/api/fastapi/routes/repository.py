"""
API Routes for repository pages.

Page views and the commands issued from them (rename, default branch,
analysis toggle, exclude patterns, ignore file, delete). Every handler gets
a resolved page context and hands it to the orchestrator.
"""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from repopages.api.fastapi.middlewares.page_context import (
    get_page_context,
    get_security_service,
    require_action,
)
from repopages.api.fastapi.responses import render_page_result
from repopages.core.config import settings
from repopages.core.database import get_db
from repopages.models.schemas.repository_pages import (
    IgnoreCodeFileRequest,
    RepositoryRenameRequest,
    SetDefaultBranchRequest,
    SetExcludePatternsRequest,
    ToggleBranchAnalysisRequest,
)
from repopages.services.branches.branch_service import BranchService
from repopages.services.repository.page_context import RepositoryPageContext
from repopages.services.repository.page_service import RepositoryPageService
from repopages.services.repository.repository_orchestrator import RepositoryOrchestrator
from repopages.services.repository.repository_service import RepositoryService
from repopages.services.repository.security_service import RepositoryAction, RepositorySecurityService
from repopages.services.storage import EntityStorage
from repopages.utils.logging.otel_logger import logger


router = APIRouter(
    prefix=settings.ROUTE_PREFIX,
    tags=["Repository"],
)


def get_repository_orchestrator(
    db: Session = Depends(get_db),
    security_service: RepositorySecurityService = Depends(get_security_service),
) -> RepositoryOrchestrator:
    return RepositoryOrchestrator(
        page_service=RepositoryPageService(db),
        repository_service=RepositoryService(db),
        branch_service=BranchService(db),
        storage=EntityStorage(db),
        security_service=security_service,
    )


# =============================================================================
# PAGES
# =============================================================================

@router.get("/{owner}/{name}/settings")
async def settings_page(
    context: RepositoryPageContext = Depends(get_page_context),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Repository settings: name, default branch and branch list"""
    return render_page_result(orchestrator.settings(context))


@router.get("/{owner}/{name}/ignore")
async def ignore_page(
    context: RepositoryPageContext = Depends(get_page_context),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Exclude pattern editor"""
    return render_page_result(orchestrator.ignore(context))


@router.get("/{owner}/{name}/branches")
async def branches_page(
    context: RepositoryPageContext = Depends(get_page_context),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Branch list with analysis state"""
    return render_page_result(orchestrator.branches(context))


@router.get("/{owner}/{name}/files")
async def files_page(
    context: RepositoryPageContext = Depends(get_page_context),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Visible files of the current branch"""
    return render_page_result(orchestrator.files(context))


@router.get("/{owner}/{name}/file")
async def code_file_page(
    path: str = Query(..., min_length=1),
    context: RepositoryPageContext = Depends(get_page_context),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """A single code file; ignored files get their own view"""
    return render_page_result(orchestrator.code_file(context, path))


# =============================================================================
# COMMANDS
# =============================================================================

@router.post("/{owner}/{name}/rename")
async def rename_repository(
    data: RepositoryRenameRequest,
    context: RepositoryPageContext = Depends(require_action(RepositoryAction.RENAME)),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """
    Rename the repository.

    Returns a client redirect to the renamed settings page, or 400 with a
    `name` field error when the name is already used in the owner's account.
    """
    logger.info(f"Renaming repository {context.url_key.owner}/{context.url_key.name} to '{data.name}'")
    return render_page_result(orchestrator.rename(context, data.name))


@router.post("/{owner}/{name}/default-branch")
async def set_default_branch(
    data: SetDefaultBranchRequest,
    context: RepositoryPageContext = Depends(require_action(RepositoryAction.SET_DEFAULT_BRANCH)),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Make another branch the default and start its analysis if needed"""
    logger.info(f"Setting default branch of {context.url_key.owner}/{context.url_key.name} to {data.name}")
    return render_page_result(await orchestrator.set_default_branch(context, data.name))


@router.post("/{owner}/{name}/branches/analysis")
async def toggle_branch_analysis(
    data: ToggleBranchAnalysisRequest,
    context: RepositoryPageContext = Depends(require_action(RepositoryAction.TOGGLE_ANALYSIS)),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Start or stop analysis of a branch. Fire-and-forget: 204 on success."""
    return render_page_result(await orchestrator.toggle_branch_analysis(context, data.name, data.action))


@router.post("/{owner}/{name}/exclude-patterns")
async def set_exclude_patterns(
    data: SetExcludePatternsRequest,
    context: RepositoryPageContext = Depends(require_action(RepositoryAction.EDIT_EXCLUDE_PATTERNS)),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Replace the exclude patterns; 204 when nothing changes"""
    return render_page_result(orchestrator.set_exclude_patterns(context, data.patterns))


@router.post("/{owner}/{name}/files/ignore")
async def ignore_code_file(
    data: IgnoreCodeFileRequest,
    context: RepositoryPageContext = Depends(require_action(RepositoryAction.IGNORE_FILE)),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Exclude a single file and hide it from listings"""
    return render_page_result(orchestrator.ignore_code_file(context, data.path))


@router.post("/{owner}/{name}/delete")
async def delete_repository(
    context: RepositoryPageContext = Depends(require_action(RepositoryAction.DELETE)),
    orchestrator: RepositoryOrchestrator = Depends(get_repository_orchestrator),
) -> Response:
    """Delete the repository and send the caller back to the dashboard"""
    logger.info(f"Deleting repository {context.url_key.owner}/{context.url_key.name}")
    return render_page_result(orchestrator.delete(context, context.user_key))
