"""Protocol-level results produced by the orchestrator, rendered by the API layer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from pydantic import BaseModel


@dataclass(frozen=True)
class ViewResult:
    view_name: str
    model: BaseModel


@dataclass(frozen=True)
class RedirectResult:
    url: str
    # Client-side redirect for XHR callers
    javascript: bool = True


@dataclass(frozen=True)
class NotFoundResult:
    message: str = "Not found"


@dataclass(frozen=True)
class EmptyResult:
    pass


@dataclass(frozen=True)
class JsonResult:
    data: Any


@dataclass(frozen=True)
class ValidationErrorResult:
    errors: Dict[str, List[str]] = field(default_factory=dict)


PageResult = Union[ViewResult, RedirectResult, NotFoundResult, EmptyResult, JsonResult, ValidationErrorResult]
