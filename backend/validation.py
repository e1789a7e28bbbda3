"""
Request payload parsing.

Route handlers turn the JSON body into a pydantic model before calling the
account workflow; anything malformed stops here with a 400.
"""

from datetime import datetime
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from backend.errors import ValidationFailure

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestModel(BaseModel):
    """Base for request bodies: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def parse_payload(model: Type[ModelT], data: Optional[Any]) -> ModelT:
    """
    Validate a JSON body against `model`.

    Args:
        model: The pydantic model class for this operation.
        data: Decoded JSON body (None when the body was missing or not JSON).

    Returns:
        An instance of `model`.

    Raises:
        ValidationFailure: With one {field, message} entry per problem.
    """
    if not isinstance(data, dict):
        raise ValidationFailure("Request body must be a JSON object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        details = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationFailure(details=details) from e


def date_only(value: Any) -> Any:
    """
    Accept full timestamps where a calendar date is expected.

    Browsers often send dates as "1990-05-17T00:00:00.000Z"; only the date
    part is kept. Strings that are not valid ISO-8601 timestamps are returned
    unchanged so the date field rejects them.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        # fromisoformat only accepts a trailing 'Z' from Python 3.11
        raw = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            return datetime.fromisoformat(raw).date()
        except ValueError:
            return value
    return value
