from typing import Dict, List

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    errorMessage: str


class ValidationErrorResponse(BaseModel):
    """Field-keyed validation messages, e.g. {"name": ["..."]}."""
    errors: Dict[str, List[str]]


class RedirectResponseBody(BaseModel):
    redirect: str
