from sqlalchemy import Column, String, TIMESTAMP, text, ForeignKey, Boolean, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from repopages.core.database import Base

class CodeFile(Base):
    __tablename__ = 'code_files'

    id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    branch_id = Column(UUID(as_uuid=True), ForeignKey('branches.id', ondelete='CASCADE'), nullable=False, index=True)
    path = Column(String, nullable=False)
    is_hidden = Column(Boolean, nullable=False, default=False)
    # Derived from the repository exclude patterns
    is_ignored = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, nullable=False, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(TIMESTAMP, nullable=False, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        UniqueConstraint('branch_id', 'path', name='uq_branch_code_file_path'),
    )

    branch = relationship("Branch", back_populates="code_files")
