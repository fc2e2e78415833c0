"""Bridge between pydantic DTO validation and the domain error model."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Type, TypeVar

from django.http import QueryDict
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from modules.core.exceptions import InvalidInput

D = TypeVar("D", bound=BaseModel)


def parse_dto(dto_class: Type[D], data: Any) -> D:
    """Validate a request body into ``dto_class``.

    Raises:
        InvalidInput: with one entry per offending field.
    """
    if isinstance(data, QueryDict):
        data = data.dict()
    if not isinstance(data, Mapping):
        raise InvalidInput({"non_field_errors": "Expected a JSON object."})
    try:
        return dto_class.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise InvalidInput(field_errors(exc)) from exc


def field_errors(exc: PydanticValidationError) -> Dict[str, str]:
    """Collapse pydantic errors into ``{field: message}`` (first message wins)."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "non_field_errors"
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(loc, message)
    return errors
