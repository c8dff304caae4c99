from typing import List, Optional

from fastapi import Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repopages.core.database import get_db
from repopages.models.db.branches import Branch
from repopages.models.db.repositories import Repository
from repopages.models.db.users import User
from repopages.services.branches.branch_directory import BranchDirectory
from repopages.services.repository.pattern_matcher import ExcludePatternMatcher
from repopages.services.repository.patterns import PatternSet
from repopages.services.repository.url_key import RepositoryUrlKey
from repopages.services.storage import EntityStorage
from repopages.utils.exception import AppException, ForbiddenException
from repopages.utils.logging.otel_logger import logger


class RepositoryService:
    def __init__(self, db: Session = Depends(get_db)):
        self.db = db
        self.storage = EntityStorage(db)

    def get_by_url_key(self, url_key: RepositoryUrlKey) -> Optional[Repository]:
        """Find a repository by name inside the url key owner's account."""
        try:
            return (
                self.db.query(Repository)
                .join(Repository.owners)
                .filter(User.username == url_key.owner, Repository.name == url_key.name)
                .first()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error looking up repository {url_key.owner}/{url_key.name}: {str(e)}")
            raise AppException(status_code=500, message="A database error occurred while fetching the repository.")

    def get_default_branch(self, repository: Repository) -> Optional[Branch]:
        return BranchDirectory(repository).default_branch()

    def ignore_patterns(self, repository: Repository, patterns: List[str]) -> None:
        """
        Store the exclude patterns and re-evaluate which code files they ignore.

        Every file of every branch is re-matched, so files that no longer match
        become visible in listings again. The repository is persisted once.
        """
        repository.exclude_patterns = PatternSet(patterns).as_list()
        matcher = ExcludePatternMatcher(repository.exclude_patterns)

        ignored = 0
        for branch in repository.branches:
            for code_file in branch.code_files:
                code_file.is_ignored = matcher.matches(code_file.path)
                ignored += int(code_file.is_ignored)

        self.storage.set(repository)
        logger.info(
            f"Propagated {len(repository.exclude_patterns)} exclude patterns for {repository.name}: "
            f"{ignored} files ignored"
        )

    def delete(self, repository: Repository, user_key: str) -> None:
        """
        Remove a repository on behalf of one of its owners.

        Raises:
            ForbiddenException: if `user_key` is not in the owner-key set
        """
        if user_key not in repository.user_keys:
            logger.warning(f"User {user_key} attempted to delete repository {repository.id} without ownership")
            raise ForbiddenException("You do not have permission to delete this repository")

        try:
            self.db.delete(repository)
            self.db.commit()
            logger.info(f"Deleted repository {repository.name} ({repository.id}) for user {user_key}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete repository {repository.id}: {e}")
            raise AppException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="A database error occurred while deleting the repository."
            )
