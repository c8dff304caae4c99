"""
Pydantic schemas for the repository pages.

Request bodies for the page commands and the display models handed to the
views. Display models that the client scripts read also carry a JSON copy.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from repopages.services.branches.analysis_lifecycle import BranchAnalysisAction


# =============================================================================
# REQUESTS
# =============================================================================

class RepositoryRenameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Proposed repository name")


class SetDefaultBranchRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the branch to make default")


class ToggleBranchAnalysisRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Branch name")
    action: BranchAnalysisAction


class SetExcludePatternsRequest(BaseModel):
    patterns: Optional[List[str]] = Field(
        default=None,
        description="Complete set of exclude patterns; empty or missing leaves the repository untouched"
    )


class IgnoreCodeFileRequest(BaseModel):
    path: str = Field(..., min_length=1)


# =============================================================================
# RESPONSES
# =============================================================================

class SetExcludePatternsResponse(BaseModel):
    message: str = "Exclude patterns updated. Files are being re-evaluated."
    patterns: List[str] = Field(default_factory=list)


# =============================================================================
# DISPLAY MODELS
# =============================================================================

class RepositoryHeaderViewModel(BaseModel):
    name: str
    external_id: str
    branch_name: Optional[str] = None
    overview_url: str
    files_url: str
    branches_url: str
    settings_url: str
    ignore_link: str
    active_url: Optional[str] = None


class PageLink(BaseModel):
    url: str
    allowed: bool


class BranchViewModel(BaseModel):
    name: str
    is_default: bool = False
    is_analyzed: bool = False


class RepositoryBranchesViewModel(BaseModel):
    header: RepositoryHeaderViewModel
    list: List[BranchViewModel]
    list_as_json: str
    toggle_analysis_link: PageLink
    toggle_analysis_link_as_json: str
    repository_external_id: str


class SettingsFieldsViewModel(BaseModel):
    name: str
    external_id: str
    default_branch: Optional[str] = None
    branches: List[str] = Field(default_factory=list)


class RepositorySettingsViewModel(BaseModel):
    header: RepositoryHeaderViewModel
    fields: SettingsFieldsViewModel
    fields_as_json: str


class IgnoreFieldsViewModel(BaseModel):
    exclude_patterns: List[str] = Field(default_factory=list)


class RepositoryIgnoreViewModel(BaseModel):
    header: RepositoryHeaderViewModel
    fields: IgnoreFieldsViewModel
    fields_as_json: str


class CodeFileViewModel(BaseModel):
    path: str
    is_ignored: bool = False
    url: str


class RepositoryBranchFilesViewModel(BaseModel):
    header: RepositoryHeaderViewModel
    files: List[CodeFileViewModel]


class CodeFileDetailViewModel(BaseModel):
    path: str
    branch_name: str
    is_hidden: bool = False
    is_ignored: bool = False


class RepositoryFileViewModel(BaseModel):
    header: RepositoryHeaderViewModel
    detail: CodeFileDetailViewModel
    ignore_file_button_visible: bool
    ignore_file_url: str


class IgnoredFileViewModel(BaseModel):
    header: RepositoryHeaderViewModel
    detail: CodeFileDetailViewModel
    edit_exclude_patterns_link: str
