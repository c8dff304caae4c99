from sqlalchemy import Column, String, TIMESTAMP, text, ForeignKey, Boolean, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from repopages.core.database import Base

class Branch(Base):
    __tablename__ = 'branches'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    repository_id = Column(UUID(as_uuid=True), ForeignKey('repositories.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    # Approximates "analysis currently running"
    is_analyzed = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(TIMESTAMP, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        UniqueConstraint('repository_id', 'name', name='uq_repository_branch_name'),
    )

    repository = relationship("Repository", back_populates="branches")
    code_files = relationship("CodeFile", back_populates="branch", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Branch(name={self.name}, is_default={self.is_default}, is_analyzed={self.is_analyzed})>"
