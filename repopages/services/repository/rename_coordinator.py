from repopages.models.db.repositories import Repository
from repopages.services.repository.outcomes import NAME_ALREADY_EXISTS, Conflict, Outcome, Renamed
from repopages.services.repository.url_key import RepositoryUrlKey
from repopages.utils.logging import get_logger

logger = get_logger(__name__)


class RenameCoordinator:
    """
    Renames a repository while keeping names unique within the owner's account.

    Nothing is mutated or persisted when the normalized name is taken.
    """

    def __init__(self, page_service, repository_service, storage):
        self.page_service = page_service
        self.repository_service = repository_service
        self.storage = storage

    def rename(self, repository: Repository, url_key: RepositoryUrlKey, proposed_name: str) -> Outcome:
        normalized = self.page_service.get_normalized_name(proposed_name)

        existing = self.repository_service.get_by_url_key(url_key.with_name(normalized))
        if existing is not None:
            logger.warning(f"Rename of {repository.name} to {normalized} rejected: name already exists for {url_key.owner}")
            return Conflict(field="name", message=NAME_ALREADY_EXISTS)

        old_name = repository.name
        repository.name = normalized
        url_key.name = normalized
        url_key.branch_name = None

        self.storage.set(repository)
        logger.info(f"Renamed repository {old_name} to {normalized} for {url_key.owner}")
        return Renamed(url_key)
