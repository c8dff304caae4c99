from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse

from repopages.models.schemas.responses import ErrorResponse, RedirectResponseBody, ValidationErrorResponse
from repopages.services.repository.page_results import (
    EmptyResult,
    JsonResult,
    NotFoundResult,
    PageResult,
    RedirectResult,
    ValidationErrorResult,
    ViewResult,
)


def render_page_result(result: PageResult) -> Response:
    """Translate an orchestrator page result into an HTTP response."""
    if isinstance(result, ViewResult):
        return JSONResponse(
            content={"view": result.view_name, "model": jsonable_encoder(result.model)}
        )
    if isinstance(result, RedirectResult):
        if result.javascript:
            return JSONResponse(content=RedirectResponseBody(redirect=result.url).model_dump())
        return RedirectResponse(url=result.url, status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(result, NotFoundResult):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ErrorResponse(errorMessage=result.message).model_dump(),
        )
    if isinstance(result, EmptyResult):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    if isinstance(result, JsonResult):
        return JSONResponse(content=jsonable_encoder(result.data))
    if isinstance(result, ValidationErrorResult):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationErrorResponse(errors=result.errors).model_dump(),
        )
    raise TypeError(f"Unhandled page result {result!r}")
