from sqlalchemy import Column, ForeignKey, Table
from sqlalchemy.dialects.postgresql import UUID
from repopages.core.database import Base

# Owner-key set of a repository: the users whose account the repository lives in
repository_owners = Table(
    'repository_owners',
    Base.metadata,
    Column('repository_id', UUID(as_uuid=True), ForeignKey('repositories.id', ondelete='CASCADE'), primary_key=True),
    Column('user_id', UUID(as_uuid=True), ForeignKey('users.user_id', ondelete='CASCADE'), primary_key=True),
)
