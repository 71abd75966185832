"""Request parsing and validation helpers shared by the routers."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import Request, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from roombnb.exceptions import MissingParameter

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


async def read_body(request: Request) -> Any:
    """Read a JSON or form-encoded request body; form files are skipped."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    if not await request.body():
        return {}
    try:
        return await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error"}]
        ) from e


def body_of(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """Build a dependency that validates the request body, JSON or form, as ``model``."""

    async def parse(request: Request) -> ModelT:
        data = await read_body(request)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False)) from e

    return parse


def require_fields(data: BaseModel, *fields: str) -> None:
    """Raise MissingParameter unless every field holds a non-blank value."""
    missing = [field for field in fields if is_blank(getattr(data, field))]
    if missing:
        raise MissingParameter()


def provided_fields(data: BaseModel) -> dict[str, Any]:
    """Return the non-blank fields of a partial update."""
    return {key: value for key, value in data.model_dump().items() if not is_blank(value)}


async def read_photo(photo: UploadFile | None) -> bytes:
    """Read an uploaded photo, raising MissingParameter when there is none."""
    if photo is None:
        raise MissingParameter("Missing photo")
    content = await photo.read()
    if not content:
        raise MissingParameter("Missing photo")
    return content
