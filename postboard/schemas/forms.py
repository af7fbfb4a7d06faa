"""Helpers for building validated schemas out of HTML form fields."""

from typing import TypeVar

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

FormModel = TypeVar("FormModel", bound=BaseModel)


def validate_form(model: type[FormModel], **fields) -> FormModel:
    """Validate form fields into a schema, reporting failures as a 422 like any other input."""
    try:
        return model.model_validate(fields)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e
