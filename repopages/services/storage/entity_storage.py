from fastapi import Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repopages.core.database import get_db
from repopages.utils.exception import AppException
from repopages.utils.logging import get_logger

logger = get_logger(__name__)


class EntityStorage:
    """Durable store for loaded entities. Last call wins."""

    def __init__(self, db: Session = Depends(get_db)):
        self.db = db

    def set(self, entity) -> None:
        try:
            self.db.add(entity)
            self.db.commit()
            self.db.refresh(entity)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to persist {entity!r}: {e}")
            raise AppException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="A database error occurred while saving changes."
            )
