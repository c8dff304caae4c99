from typing import Set

from sqlalchemy import Column, String, TIMESTAMP, text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from repopages.core.database import Base
from repopages.models.db.repository_owners import repository_owners

class Repository(Base):
    __tablename__ = 'repositories'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    external_id = Column(String(255), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    # Stored sorted and de-duplicated, see PatternSet
    exclude_patterns = Column(JSON, nullable=False, default=list)
    created_at = Column(TIMESTAMP, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(TIMESTAMP, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    owners = relationship("User", secondary=repository_owners, back_populates="repositories")
    branches = relationship(
        "Branch",
        back_populates="repository",
        cascade="all, delete-orphan",
        order_by="Branch.name",
    )

    @property
    def user_keys(self) -> Set[str]:
        return {owner.user_key for owner in self.owners}

    def __repr__(self) -> str:
        return f"<Repository(id={self.id}, name={self.name})>"
