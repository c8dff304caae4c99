import re
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from repopages.core.database import get_db
from repopages.models.db.branches import Branch
from repopages.models.db.code_files import CodeFile
from repopages.models.db.repositories import Repository
from repopages.models.schemas.repository_pages import (
    BranchViewModel,
    CodeFileDetailViewModel,
    CodeFileViewModel,
    IgnoreFieldsViewModel,
    RepositoryHeaderViewModel,
    SettingsFieldsViewModel,
)
from repopages.services.branches.branch_directory import BranchDirectory
from repopages.services.repository.url_key import RepositoryUrlHelper, RepositoryUrlKey

_NAME_SEPARATORS = re.compile(r"[^a-z0-9._]+")


class RepositoryPageService:
    """Assembles display models for the repository pages."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    @staticmethod
    def get_normalized_name(name: str) -> str:
        return _NAME_SEPARATORS.sub("-", (name or "").strip().lower()).strip("-")

    def get_header(
        self,
        repository: Repository,
        url_key: RepositoryUrlKey,
        urls: RepositoryUrlHelper,
    ) -> RepositoryHeaderViewModel:
        return RepositoryHeaderViewModel(
            name=repository.name,
            external_id=repository.external_id,
            branch_name=url_key.branch_name,
            overview_url=urls.overview(url_key),
            files_url=urls.files(url_key),
            branches_url=urls.branches(url_key),
            settings_url=urls.settings(url_key),
            ignore_link=urls.ignore(url_key),
        )

    def get_settings_fields(self, repository: Repository) -> SettingsFieldsViewModel:
        directory = BranchDirectory(repository)
        default_branch = directory.default_branch()
        return SettingsFieldsViewModel(
            name=repository.name,
            external_id=repository.external_id,
            default_branch=default_branch.name if default_branch is not None else None,
            branches=[branch.name for branch in directory.branches],
        )

    def get_ignore_fields(self, repository: Repository) -> IgnoreFieldsViewModel:
        return IgnoreFieldsViewModel(exclude_patterns=sorted(repository.exclude_patterns or []))

    def get_branches(self, repository: Repository) -> List[BranchViewModel]:
        return [
            BranchViewModel(
                name=branch.name,
                is_default=bool(branch.is_default),
                is_analyzed=bool(branch.is_analyzed),
            )
            for branch in BranchDirectory(repository).branches
        ]

    def get_branch_files(
        self,
        branch: Branch,
        url_key: RepositoryUrlKey,
        urls: RepositoryUrlHelper,
    ) -> List[CodeFileViewModel]:
        code_files = (
            self.db.query(CodeFile)
            .filter(CodeFile.branch_id == branch.id, CodeFile.is_hidden.is_(False))
            .order_by(CodeFile.path)
            .all()
        )
        return [
            CodeFileViewModel(
                path=code_file.path,
                is_ignored=bool(code_file.is_ignored),
                url=urls.code_file(url_key, code_file.path),
            )
            for code_file in code_files
        ]

    def get_code_file_detail(self, branch: Branch, path: str) -> Optional[CodeFileDetailViewModel]:
        code_file = (
            self.db.query(CodeFile)
            .filter(CodeFile.branch_id == branch.id, CodeFile.path == path)
            .first()
        )
        if code_file is None:
            return None
        return CodeFileDetailViewModel(
            path=code_file.path,
            branch_name=branch.name,
            is_hidden=bool(code_file.is_hidden),
            is_ignored=bool(code_file.is_ignored),
        )
