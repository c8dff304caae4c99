"""
Repository page orchestrator.

Composes the page components on top of a resolved page context and turns
their decisions into protocol-level page results. Authorization questions
are always delegated to the security service.
"""

from typing import Iterable, List, Optional, Union

from pydantic import TypeAdapter

from repopages.models.schemas.repository_pages import (
    BranchViewModel,
    IgnoredFileViewModel,
    RepositoryBranchesViewModel,
    RepositoryBranchFilesViewModel,
    RepositoryFileViewModel,
    RepositoryIgnoreViewModel,
    RepositorySettingsViewModel,
    SetExcludePatternsResponse,
)
from repopages.services.branches.analysis_lifecycle import AnalysisLifecycle, BranchAnalysisAction
from repopages.services.branches.default_branch import DefaultBranchSwitcher
from repopages.services.repository.exclude_patterns import ExcludePatternManager, IgnoreFileWorkflow
from repopages.services.repository.outcomes import (
    Acknowledged,
    Changed,
    Conflict,
    NoOp,
    NotFound,
    Outcome,
    Redirect,
    RedirectTarget,
    Renamed,
)
from repopages.services.repository.page_context import RepositoryPageContext
from repopages.services.repository.page_results import (
    EmptyResult,
    JsonResult,
    NotFoundResult,
    PageResult,
    RedirectResult,
    ValidationErrorResult,
    ViewResult,
)
from repopages.services.repository.rename_coordinator import RenameCoordinator
from repopages.services.repository.security_service import RepositoryAction
from repopages.utils.logging import get_logger

logger = get_logger(__name__)

_BRANCH_LIST = TypeAdapter(List[BranchViewModel])

IGNORED_CODE_FILE_VIEW = "ignored_code_file"


class RepositoryOrchestrator:
    def __init__(self, page_service, repository_service, branch_service, storage, security_service):
        self.page_service = page_service
        self.repository_service = repository_service
        self.branch_service = branch_service
        self.security_service = security_service

        self.lifecycle = AnalysisLifecycle(branch_service)
        self.renamer = RenameCoordinator(page_service, repository_service, storage)
        self.default_switcher = DefaultBranchSwitcher(branch_service, repository_service, storage, self.lifecycle)
        self.pattern_manager = ExcludePatternManager(repository_service)
        self.ignore_workflow = IgnoreFileWorkflow(branch_service, repository_service)

    # =========================================================================
    # PAGES
    # =========================================================================

    def settings(self, context: RepositoryPageContext) -> PageResult:
        context.header.active_url = context.header.settings_url
        fields = self.page_service.get_settings_fields(context.repository)
        return ViewResult(
            "settings",
            RepositorySettingsViewModel(
                header=context.header,
                fields=fields,
                fields_as_json=fields.model_dump_json(),
            ),
        )

    def ignore(self, context: RepositoryPageContext) -> PageResult:
        context.header.active_url = context.header.settings_url
        fields = self.page_service.get_ignore_fields(context.repository)
        return ViewResult(
            "ignore",
            RepositoryIgnoreViewModel(
                header=context.header,
                fields=fields,
                fields_as_json=fields.model_dump_json(),
            ),
        )

    def branches(self, context: RepositoryPageContext) -> PageResult:
        context.header.active_url = context.header.branches_url
        branches = self.page_service.get_branches(context.repository)
        toggle_link = self.security_service.get_page_link(
            RepositoryAction.TOGGLE_ANALYSIS,
            context.role,
            context.urls.toggle_analysis(context.url_key),
        )
        return ViewResult(
            "branches",
            RepositoryBranchesViewModel(
                header=context.header,
                list=branches,
                list_as_json=_BRANCH_LIST.dump_json(branches).decode(),
                toggle_analysis_link=toggle_link,
                toggle_analysis_link_as_json=toggle_link.model_dump_json(),
                repository_external_id=context.repository.external_id,
            ),
        )

    def files(self, context: RepositoryPageContext) -> PageResult:
        if context.branch is None:
            return NotFoundResult("Branch not found")
        context.header.active_url = context.header.files_url
        files = self.page_service.get_branch_files(context.branch, context.url_key, context.urls)
        return ViewResult("files", RepositoryBranchFilesViewModel(header=context.header, files=files))

    def code_file(self, context: RepositoryPageContext, path: str) -> PageResult:
        if context.branch is None:
            return NotFoundResult("Branch not found")
        detail = self.page_service.get_code_file_detail(context.branch, path)
        if detail is None or detail.is_hidden:
            return NotFoundResult("Code file not found")

        context.header.active_url = context.header.files_url
        if detail.is_ignored:
            return ViewResult(
                IGNORED_CODE_FILE_VIEW,
                IgnoredFileViewModel(
                    header=context.header,
                    detail=detail,
                    edit_exclude_patterns_link=context.header.ignore_link,
                ),
            )

        return ViewResult(
            "code_file",
            RepositoryFileViewModel(
                header=context.header,
                detail=detail,
                ignore_file_button_visible=self.security_service.is_allowed(
                    RepositoryAction.IGNORE_FILE, context.role
                ),
                ignore_file_url=context.urls.page(context.url_key, "files/ignore"),
            ),
        )

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def rename(self, context: RepositoryPageContext, name: str) -> PageResult:
        outcome = self.renamer.rename(context.repository, context.url_key, name)
        return self._to_result(context, outcome)

    async def set_default_branch(self, context: RepositoryPageContext, branch_name: str) -> PageResult:
        outcome = await self.default_switcher.switch(context.repository, context.url_key, branch_name)
        return self._to_result(context, outcome)

    async def toggle_branch_analysis(
        self,
        context: RepositoryPageContext,
        branch_name: str,
        action: Union[BranchAnalysisAction, str, None],
    ) -> PageResult:
        outcome = await self.lifecycle.toggle(context.repository, branch_name, action)
        return self._to_result(context, outcome)

    def set_exclude_patterns(self, context: RepositoryPageContext, patterns: Optional[Iterable[str]]) -> PageResult:
        outcome = self.pattern_manager.set_patterns(context.repository, patterns)
        return self._to_result(context, outcome)

    def ignore_code_file(self, context: RepositoryPageContext, path: str) -> PageResult:
        if context.branch is None:
            return NotFoundResult("Branch not found")
        outcome = self.ignore_workflow.ignore(context.repository, context.branch, context.url_key, path)
        return self._to_result(context, outcome)

    def delete(self, context: RepositoryPageContext, user_key: str) -> PageResult:
        self.repository_service.delete(context.repository, user_key)
        return self._to_result(context, Redirect(RedirectTarget.DASHBOARD, context.url_key))

    # =========================================================================
    # OUTCOME MAPPING
    # =========================================================================

    def _to_result(self, context: RepositoryPageContext, outcome: Outcome) -> PageResult:
        urls = context.urls
        if isinstance(outcome, NotFound):
            return NotFoundResult(f"{outcome.what.capitalize()} not found")
        if isinstance(outcome, Conflict):
            return ValidationErrorResult({outcome.field: [outcome.message]})
        if isinstance(outcome, (NoOp, Acknowledged)):
            return EmptyResult()
        if isinstance(outcome, Changed):
            return JsonResult(SetExcludePatternsResponse(patterns=outcome.patterns))
        if isinstance(outcome, Renamed):
            return RedirectResult(urls.settings(outcome.url_key))
        if isinstance(outcome, Redirect):
            if outcome.target is RedirectTarget.SETTINGS:
                return RedirectResult(urls.settings(outcome.url_key))
            if outcome.target is RedirectTarget.FILES:
                return RedirectResult(urls.files(outcome.url_key), javascript=False)
            return RedirectResult(urls.dashboard())
        raise TypeError(f"Unhandled outcome {outcome!r}")
