"""
Exclude pattern maintenance for a repository.

Propagation of patterns to the code files is expensive, so it only runs when
the stored set actually changes.
"""

from typing import Iterable, Optional

from repopages.models.db.branches import Branch
from repopages.models.db.repositories import Repository
from repopages.services.repository.outcomes import Changed, NoOp, NotFound, Outcome, Redirect, RedirectTarget
from repopages.services.repository.patterns import PatternSet
from repopages.services.repository.url_key import RepositoryUrlKey
from repopages.utils.logging import get_logger

logger = get_logger(__name__)


class ExcludePatternManager:
    def __init__(self, repository_service):
        self.repository_service = repository_service

    def set_patterns(self, repository: Repository, candidate_patterns: Optional[Iterable[str]]) -> Outcome:
        candidate = PatternSet(candidate_patterns)
        if not candidate:
            return NoOp()

        current = PatternSet.of(repository)
        if not candidate.differs_from(current):
            logger.debug(f"Exclude patterns of {repository.name} unchanged, skipping propagation")
            return NoOp()

        patterns = candidate.as_list()
        repository.exclude_patterns = patterns
        self.repository_service.ignore_patterns(repository, patterns)
        logger.info(
            f"Exclude patterns of {repository.name} changed: {sorted(candidate.difference(current))}"
        )
        return Changed(patterns)


class IgnoreFileWorkflow:
    """Adds a single file path to the exclude patterns and hides the file."""

    def __init__(self, branch_service, repository_service):
        self.branch_service = branch_service
        self.repository_service = repository_service

    def ignore(self, repository: Repository, branch: Branch, url_key: RepositoryUrlKey, path: str) -> Outcome:
        code_file = self.branch_service.get_code_file(branch, path)
        if code_file is None:
            logger.warning(f"Cannot ignore {path}: not found on branch {branch.name} of {repository.name}")
            return NotFound("code file")

        current = PatternSet.of(repository)
        if path not in current:
            patterns = current.with_pattern(path).as_list()
            repository.exclude_patterns = patterns
            self.repository_service.ignore_patterns(repository, patterns)
            logger.info(f"Added {path} to exclude patterns of {repository.name}")

        self.branch_service.hide_code_file(code_file)
        return Redirect(RedirectTarget.FILES, url_key)
