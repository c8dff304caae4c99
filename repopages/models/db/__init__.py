# Import all models to ensure SQLAlchemy can resolve relationships
from .repository_owners import repository_owners
from .users import User
from .repositories import Repository
from .branches import Branch
from .code_files import CodeFile

# Export all models
__all__ = [
    'repository_owners',
    'User',
    'Repository',
    'Branch',
    'CodeFile',
]
