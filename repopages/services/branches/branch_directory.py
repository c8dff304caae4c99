from typing import List, Optional

from repopages.models.db.branches import Branch
from repopages.models.db.repositories import Repository


class BranchDirectory:
    """
    In-memory view over a repository's branch collection.

    Keeps at most one branch flagged as default when the default moves.
    """

    def __init__(self, repository: Repository):
        self.repository = repository

    @property
    def branches(self) -> List[Branch]:
        return list(self.repository.branches or [])

    def resolve(self, name: Optional[str]) -> Optional[Branch]:
        if not name:
            return None
        for branch in self.branches:
            if branch.name == name:
                return branch
        return None

    def default_branch(self) -> Optional[Branch]:
        for branch in self.branches:
            if branch.is_default:
                return branch
        return None

    def set_default(self, branch: Branch, previous: Optional[Branch] = None) -> None:
        """
        Flag `branch` as the default and clear the flag everywhere else.

        `previous` is the default as reported by the repository lookup; it is
        cleared even when it is not part of the loaded collection.
        """
        if previous is not None and previous is not branch:
            previous.is_default = False
        for other in self.branches:
            if other is not branch and other.is_default:
                other.is_default = False
        branch.is_default = True
