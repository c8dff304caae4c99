"""
Decisions returned by the repository page components.

Absence, conflicts and no-ops are carried as values so callers branch on the
variant instead of inspecting a placeholder entity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from repopages.services.repository.url_key import RepositoryUrlKey


NAME_ALREADY_EXISTS = "Name already exists on this account"


class RedirectTarget(str, Enum):
    SETTINGS = "settings"
    FILES = "files"
    DASHBOARD = "dashboard"


@dataclass(frozen=True)
class NotFound:
    what: str = "resource"


@dataclass(frozen=True)
class Conflict:
    field: str
    message: str


@dataclass(frozen=True)
class NoOp:
    pass


@dataclass(frozen=True)
class Changed:
    patterns: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Renamed:
    url_key: RepositoryUrlKey


@dataclass(frozen=True)
class Redirect:
    target: RedirectTarget
    url_key: RepositoryUrlKey


@dataclass(frozen=True)
class Acknowledged:
    pass


Outcome = Union[NotFound, Conflict, NoOp, Changed, Renamed, Redirect, Acknowledged]
